from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class UploadedDocument(BaseModel):
    """A validated upload, ready to be sent to the content-generation service."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    display_name: str
    payload: bytes
    media_type: str


class NewsItem(BaseModel):
    """One categorized, summarized current-affairs entry.

    Field aliases are the names used on the wire by the generation service's
    response schema and by the JSON API.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section: str = Field(alias="title")
    subsection: str = Field(alias="subTitle")
    date: str
    headline: str
    body_points: tuple[str, ...] = Field(alias="content")
    background_facts: tuple[str, ...] = Field(alias="staticGk")


class NewsItemsPayload(BaseModel):
    """Request body for export and spreadsheet-sync endpoints."""

    data: list[NewsItem]


class DigestResponse(BaseModel):
    """Result of processing a batch of uploads."""

    items: list[NewsItem]
    empty: bool
