"""Gemini request orchestration: build one request, dispatch it, retry on overload, parse the result."""

import asyncio
import logging
import pathlib
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

import jinja2
from google import genai
from google.genai import types
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError
from tenacity import AsyncRetrying
from tenacity import RetryCallState
from tenacity import retry_if_exception_type
from tenacity import stop_after_attempt
from tenacity import wait_exponential

from daily_digest.core.config import settings
from daily_digest.core.exceptions import ConfigurationError
from daily_digest.core.exceptions import FormatError
from daily_digest.core.exceptions import TerminalServiceError
from daily_digest.core.exceptions import TransientServiceError
from daily_digest.core.exceptions import ValidationError
from daily_digest.core.taxonomy import FALLBACK_SECTION
from daily_digest.core.taxonomy import SECTIONS
from daily_digest.models.news_models import NewsItem
from daily_digest.models.news_models import UploadedDocument

logger = logging.getLogger(__name__)

# Retry contract: 4 attempts in total, waiting 5s, 10s, 20s between them
MAX_ATTEMPTS = 4
BASE_DELAY_SECONDS = 5

# Last-resort markers for overload errors that carry no usable status code
TRANSIENT_STATUS_CODE = 503
TRANSIENT_MARKERS: tuple[str, ...] = ("503", "unavailable", "high demand")

TARGET_EXAMS = "Banking, SSC, UPSC, Railway, State Exams"

PROMPT_DIR = pathlib.Path(__file__).parent / "prompt_templates"
env = jinja2.Environment(loader=jinja2.FileSystemLoader(PROMPT_DIR), keep_trailing_newline=True)

_string = types.Schema(type=types.Type.STRING)
_string_list = types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))

NEWS_FIELDS: tuple[str, ...] = ("title", "subTitle", "date", "headline", "content", "staticGk")

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": _string,
            "subTitle": _string,
            "date": _string,
            "headline": _string,
            "content": _string_list,
            "staticGk": _string_list,
        },
        required=list(NEWS_FIELDS),
    ),
)

_news_items_adapter = TypeAdapter(list[NewsItem])

Sleep = Callable[[float], Awaitable[None]]
ClientFactory = Callable[[str], Any]


def build_prompt() -> str:
    """Render the fixed instruction block describing the taxonomy and output rules."""
    template = env.get_template("extraction_prompt.jinja2")
    return template.render(
        exams=TARGET_EXAMS,
        sections=SECTIONS,
        fallback=FALLBACK_SECTION,
        min_points=4,
        max_points=8,
    )


def build_contents(documents: Sequence[UploadedDocument], prompt: str) -> list[types.Content]:
    """One user turn: every document as inline bytes, then the instructions."""
    parts = [types.Part.from_bytes(data=doc.payload, mime_type=doc.media_type) for doc in documents]
    parts.append(types.Part.from_text(text=prompt))
    return [types.Content(role="user", parts=parts)]


def build_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )


def is_transient_error(exc: BaseException) -> bool:
    """Decide whether *exc* signals a retryable overload of the generation service.

    The structured status code exposed by the SDK (``google.genai.errors.APIError.code``)
    is checked first. Only when none matches does the error text get scanned for
    one of ``TRANSIENT_MARKERS``.
    """
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and value == TRANSIENT_STATUS_CODE:
            return True

    message = str(exc).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


def parse_news_items(raw: str | None) -> tuple[NewsItem, ...]:
    """Validate the raw JSON body against the declared response schema.

    An empty body is treated as an empty list, matching the service's behaviour
    when nothing relevant was found.
    """
    text = (raw or "").strip() or "[]"
    try:
        items = _news_items_adapter.validate_json(text)
    except SchemaValidationError as e:
        raise FormatError(
            f"Failed to process content into structured format: response does not match the declared schema ({e.error_count()} error(s))."
        ) from e
    return tuple(items)


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=int(settings.llm_timeout_seconds * 1000)),
    )


async def _close_client(client: Any, request_id: str) -> None:
    """Release the async HTTP pool of a per-call client. Older SDK releases have no aclose."""
    aclose = getattr(getattr(client, "aio", None), "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.warning("[%s] Failed to close Gemini client: %s", request_id, e)


class NewsExtractor:
    """Turns a batch of documents into categorized news items with one Gemini call.

    Args:
        client_factory: Builds an SDK client from an API key. A fresh client is
            built for every call so no state survives between invocations.
        sleep: Awaitable used between attempts.
        api_key: Overrides ``settings.gemini_api_key``.
        model_id: Overrides ``settings.model_id``.
    """

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
        api_key: str | None = None,
        model_id: str | None = None,
    ) -> None:
        self._client_factory = client_factory or _default_client_factory
        self._sleep = sleep
        self._api_key = api_key
        self._model_id = model_id

    @property
    def api_key(self) -> str | None:
        return self._api_key or settings.gemini_api_key

    @property
    def model_id(self) -> str:
        return self._model_id or settings.model_id

    async def extract(self, documents: Sequence[UploadedDocument]) -> tuple[NewsItem, ...]:
        request_id = str(uuid4())
        api_key = self.api_key
        if not api_key:
            logger.error("[%s] GEMINI_API_KEY is not configured", request_id)
            raise ConfigurationError("GEMINI_API_KEY is not configured. Please add it to your environment variables.")
        if not documents:
            raise ValidationError("At least one document is required.")

        logger.info(
            "[%s] Sending %d document(s) (%d bytes) to model %s",
            request_id,
            len(documents),
            sum(len(doc.payload) for doc in documents),
            self.model_id,
        )
        client = self._client_factory(api_key)
        contents = build_contents(documents, build_prompt())
        config = build_config()

        retrying = AsyncRetrying(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_exponential(multiplier=BASE_DELAY_SECONDS),
            retry=retry_if_exception_type(TransientServiceError),
            sleep=self._sleep,
            before_sleep=lambda state: self._log_retry(request_id, state),
            reraise=True,
        )
        try:
            raw = await retrying(self._generate_once, client, contents, config, request_id)
        except TransientServiceError as e:
            logger.error("[%s] Service still unavailable after %d attempts", request_id, MAX_ATTEMPTS)
            raise TerminalServiceError(
                f"The AI service is temporarily unavailable after {MAX_ATTEMPTS} attempts. Please try again later."
            ) from e
        finally:
            await _close_client(client, request_id)

        items = parse_news_items(raw)
        logger.info("[%s] Extracted %d news item(s)", request_id, len(items))
        return items

    async def _generate_once(
        self,
        client: Any,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
        request_id: str,
    ) -> str | None:
        try:
            response = await client.aio.models.generate_content(
                model=self.model_id,
                contents=contents,
                config=config,
            )
        except Exception as e:
            if is_transient_error(e):
                logger.warning("[%s] Transient service error: %s", request_id, e)
                raise TransientServiceError(str(e)) from e
            logger.error("[%s] Content generation failed: %s", request_id, e, exc_info=True)
            raise TerminalServiceError(f"Content generation failed: {e}") from e

        text = getattr(response, "text", None)
        logger.debug("[%s] Raw response length: %d chars", request_id, len(text or ""))
        return text

    @staticmethod
    def _log_retry(request_id: str, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            "[%s] Service overloaded, retrying in %ss (attempt %d/%d)",
            request_id,
            int(delay),
            retry_state.attempt_number,
            MAX_ATTEMPTS,
        )


async def extract_news_items(documents: Sequence[UploadedDocument]) -> tuple[NewsItem, ...]:
    """Module-level convenience wrapper using the default client and real sleeps."""
    return await NewsExtractor().extract(documents)
