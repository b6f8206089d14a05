"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from frog_backend.db.time import as_utc


class PostCreate(BaseModel):
    """JSON body for creating a post without an image upload."""

    text: str = ""
    links: list[Any] | str = Field(default_factory=list)
    images: list[Any] | str = Field(default_factory=list)


class PostCreated(BaseModel):
    content_hash: str = Field(..., alias="contentHash")

    model_config = ConfigDict(populate_by_name=True)


class PostDeleted(BaseModel):
    ok: bool = True
    deleted: bool


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    content_hash: str = Field(..., alias="contentHash")
    text: str
    links: list[str]
    images: list[str]
    created_at: datetime = Field(..., alias="createdAt")
    total_tip_micro_stx: str = Field(..., alias="totalTipMicroStx")
    tip_count: int = Field(..., alias="tipCount")

    @model_validator(mode="before")
    @classmethod
    def _from_row(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        total = data.get("total_tip_micro_stx")
        if isinstance(total, int):
            data["total_tip_micro_stx"] = str(total)
        if data.get("links") is None:
            data["links"] = []
        if data.get("images") is None:
            data["images"] = []
        return data

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return as_utc(value).isoformat()

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PostsByHashResponse(BaseModel):
    posts: dict[str, PostResponse]
