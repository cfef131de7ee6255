"""Pydantic schemas for timeline endpoints"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.application.use_cases.timelines import PostSubmission


class TimelinePostRequest(BaseModel):
    """Post body sent by the virtual-world client"""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=128)
    icon_resdb: str = Field(..., alias="iconResdb", description="Asset reference, e.g. resdb:///<hash>.webp")
    message: str = Field(..., max_length=10000)
    medias: list[str] | None = Field(None, description="Image URLs to attach")

    @field_validator("medias")
    @classmethod
    def drop_blank_medias(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return [url.strip() for url in v if url and url.strip()]

    def to_submission(self) -> PostSubmission:
        return PostSubmission(
            username=self.username,
            icon_reference=self.icon_resdb,
            message=self.message,
            medias=list(self.medias or []),
        )


class MediaResponse(BaseModel):
    type: str
    url: str


class ReactionResponse(BaseModel):
    url: str
    count: int


class LinkPreviewResponse(BaseModel):
    url: str
    thumbnail: str | None = None
    title: str | None = None
    description: str | None = None


class TimelineEntryResponse(BaseModel):
    name: str
    avatar: str
    message: str
    medias: list[MediaResponse] = Field(default_factory=list)
    timestamp: str
    reactions: list[ReactionResponse] = Field(default_factory=list)
    url: LinkPreviewResponse | None = None


class TimelineResponse(BaseModel):
    """Aggregated timeline before ordered-map encoding"""

    name: str
    entries: list[TimelineEntryResponse] = Field(default_factory=list)


EmapResponse = dict[str, Any]
