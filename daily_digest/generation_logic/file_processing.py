"""Validates uploaded files and turns them into ``UploadedDocument`` objects.

Every upload is checked against extension, size and sniffed MIME type before
anything is sent to the content-generation service. Only PDFs are accepted.
"""

import asyncio
import logging
from pathlib import Path
from uuid import uuid4

import magic
from fastapi import UploadFile

from daily_digest.core.exceptions import ValidationError
from daily_digest.core.validation import ALLOWED_EXTENSIONS
from daily_digest.core.validation import MAX_FILE_SIZE
from daily_digest.core.validation import MAX_FILES
from daily_digest.core.validation import MAX_TOTAL_SIZE
from daily_digest.core.validation import MIME_MAPPING
from daily_digest.models.news_models import UploadedDocument

__all__ = [
    "_validate_uploads",
]

logger = logging.getLogger(__name__)


async def _validate_single_upload(f_obj: UploadFile, request_id: str) -> UploadedDocument:
    filename = f_obj.filename or "unknown_file"
    ext = Path(filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        logger.warning("[%s] Rejected file with invalid extension: %s for file %s", request_id, ext, filename)
        raise ValidationError(f"Only PDF files are supported ('{filename}').")

    try:
        contents = await f_obj.read()
    except Exception as read_err:
        logger.error("[%s] Failed to read %s: %s", request_id, filename, read_err, exc_info=True)
        raise ValidationError(f"Unable to read '{filename}'.") from read_err

    size = len(contents)
    if size == 0:
        logger.warning("[%s] Rejected empty file: %s", request_id, filename)
        raise ValidationError(f"The file '{filename}' is empty and cannot be processed.")
    if size > MAX_FILE_SIZE:
        logger.warning("[%s] Rejected file exceeding size limit: %s (%d bytes)", request_id, filename, size)
        raise ValidationError(
            f"File '{filename}' is too large ({size // (1024 * 1024)}MB). Limit per file: {MAX_FILE_SIZE // (1024 * 1024)}MB",
            status_code=413,
        )

    mime = await asyncio.to_thread(magic.from_buffer, contents, mime=True)
    expected_mime = MIME_MAPPING[ext]
    if mime != expected_mime:
        logger.warning(
            "[%s] Rejected file with mismatched content type: %s. Expected: %s, Got: %s",
            request_id,
            filename,
            expected_mime,
            mime,
        )
        raise ValidationError(f"The content of '{filename}' (detected: {mime}) is not a PDF document.")

    logger.debug("[%s] File validation successful: %s (%d bytes, MIME: %s)", request_id, filename, size, mime)
    return UploadedDocument(
        identifier=uuid4().hex[:9],
        display_name=filename,
        payload=contents,
        media_type=expected_mime,
    )


async def _close_upload(f_obj: UploadFile, request_id: str) -> None:
    try:
        await f_obj.close()
    except Exception as close_err:
        logger.warning("[%s] Error closing upload %s: %s", request_id, f_obj.filename, close_err)


async def _validate_uploads(files: list[UploadFile], request_id: str) -> list[UploadedDocument]:
    """Validate every upload, in order, and return the accepted documents.

    Raises:
        ValidationError: on the first rejected file, or when the batch as a
            whole is empty or exceeds the count/total-size limits.
    """
    if not files:
        raise ValidationError("No files were uploaded.")
    if len(files) > MAX_FILES:
        raise ValidationError(f"Too many files ({len(files)}). Maximum allowed: {MAX_FILES}")

    documents: list[UploadedDocument] = []
    total_size = 0
    try:
        for f_obj in files:
            document = await _validate_single_upload(f_obj, request_id)
            total_size += len(document.payload)
            if total_size > MAX_TOTAL_SIZE:
                logger.warning("[%s] Upload batch exceeds total size limit (%d bytes)", request_id, total_size)
                raise ValidationError(
                    f"Total upload size exceeds {MAX_TOTAL_SIZE // (1024 * 1024)}MB.",
                    status_code=413,
                )
            documents.append(document)
    finally:
        for f_obj in files:
            await _close_upload(f_obj, request_id)

    logger.info("[%s] Accepted %d document(s), %d bytes total", request_id, len(documents), total_size)
    return documents
