import io
from types import SimpleNamespace

import pytest

from daily_digest.models.news_models import NewsItem
from daily_digest.models.news_models import UploadedDocument

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


# Fixture factory to create dummy upload files with filename and content
@pytest.fixture
def make_dummy_upload():
    def _make_dummy_upload(filename: str, content: bytes):
        class DummyFile:
            def __init__(self):
                self.filename = filename
                self._content = content
                self.file = io.BytesIO(content)
                self.closed = False

            async def read(self):
                return self._content

            async def close(self):
                self.closed = True

        return DummyFile()

    return _make_dummy_upload


@pytest.fixture
def pdf_document():
    return UploadedDocument(
        identifier="doc1",
        display_name="daily.pdf",
        payload=PDF_BYTES,
        media_type="application/pdf",
    )


@pytest.fixture
def sample_items():
    return [
        NewsItem(
            title="BANKING & FINANCE",
            subTitle="RBI",
            date="18 February 2026",
            headline="RBI keeps repo rate unchanged at 6.5%",
            content=("The MPC voted 5:1 to hold the rate.", "Stance remains neutral."),
            staticGk=("RBI HQ: Mumbai", "Established: 1935"),
        ),
        NewsItem(
            title="SPORTS",
            subTitle="Winners",
            date="17 February 2026",
            headline="India wins the Asia Cup <final>",
            content=("India beat Sri Lanka by 6 wickets.",),
            staticGk=(),
        ),
    ]


class FakeModels:
    """Stands in for ``client.aio.models``; replays a scripted list of outcomes."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return SimpleNamespace(text=outcome)


@pytest.fixture
def fake_genai():
    """Returns (client_factory, models). ``models.outcomes`` must be set by the test."""
    models = FakeModels([])
    closed = []

    async def _aclose():
        closed.append(True)

    client = SimpleNamespace(aio=SimpleNamespace(models=models, aclose=_aclose))
    seen_keys = []

    def _factory(api_key):
        seen_keys.append(api_key)
        return client

    _factory.seen_keys = seen_keys
    _factory.closed = closed
    return _factory, models


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()
