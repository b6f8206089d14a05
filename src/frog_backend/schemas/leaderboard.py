"""Leaderboard Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PostLeaderResponse(BaseModel):
    rank: int
    content_hash: str = Field(..., alias="contentHash")
    post_id: str = Field(..., alias="postId")
    total_tip_micro_stx: str = Field(..., alias="totalTipMicroStx")
    tip_count: int = Field(..., alias="tipCount")
    text_preview: str = Field(..., alias="textPreview")

    model_config = ConfigDict(populate_by_name=True)


class LeaderboardFeatures(BaseModel):
    creator_tipper_enabled: bool = Field(False, alias="creatorTipperEnabled")

    model_config = ConfigDict(populate_by_name=True)


class AddressLeaderResponse(BaseModel):
    rank: int
    address: str
    total_tip_micro_stx: str = Field(..., alias="totalTipMicroStx")

    model_config = ConfigDict(populate_by_name=True)


class Leaders(BaseModel):
    posts: list[PostLeaderResponse]
    # Creator and tipper rankings need on-chain authorship; always empty here.
    creators: list[AddressLeaderResponse] = Field(default_factory=list)
    tippers: list[AddressLeaderResponse] = Field(default_factory=list)


class LeaderboardResponse(BaseModel):
    updated_at: str = Field(..., alias="updatedAt")
    range: str
    features: LeaderboardFeatures = Field(default_factory=LeaderboardFeatures)
    leaders: Leaders

    model_config = ConfigDict(populate_by_name=True)
