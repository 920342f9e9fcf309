"""Generation logic package.

Helpers that sit between the HTTP routes and the services: upload validation,
the end-to-end digest flow and export streaming. Keeping them here lets
`daily_digest/api/routes.py` stay focused on HTTP routing.
"""

from .digest_flow import build_digest  # noqa: F401
from .export_finalization import _generate_and_stream_export  # noqa: F401
from .file_processing import _validate_uploads  # noqa: F401
