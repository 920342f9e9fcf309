"""Defines constants for file upload validation."""

# Only PDFs are sent to the content-generation service
ALLOWED_EXTENSIONS: set[str] = {".pdf"}
MAX_FILE_SIZE: int = 25 * 1024 * 1024  # 25 MB per file

# Maximum number of files allowed in a single request
MAX_FILES: int = 20

MAX_TOTAL_SIZE: int = 100 * 1024 * 1024  # 100 MB total upload limit

PDF_MEDIA_TYPE = "application/pdf"

# MIME type mapping for validation
MIME_MAPPING: dict[str, str] = {
    ".pdf": PDF_MEDIA_TYPE,
}
