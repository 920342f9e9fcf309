"""End-to-end digest flow: validate uploads, run the extractor, shape the response."""

import logging

from fastapi import UploadFile

from daily_digest.generation_logic.file_processing import _validate_uploads
from daily_digest.models.news_models import DigestResponse
from daily_digest.services.extractor import NewsExtractor

__all__ = [
    "build_digest",
]

logger = logging.getLogger(__name__)


async def build_digest(files: list[UploadFile], request_id: str, extractor: NewsExtractor | None = None) -> DigestResponse:
    """Validate *files* and turn them into a digest.

    An empty result is a success: ``empty`` is set so the client can tell
    "nothing exam-relevant found" apart from a failure.
    """
    documents = await _validate_uploads(files, request_id)
    items = await (extractor or NewsExtractor()).extract(documents)
    if not items:
        logger.info("[%s] No exam-relevant content found in %d document(s)", request_id, len(documents))
    return DigestResponse(items=list(items), empty=not items)
