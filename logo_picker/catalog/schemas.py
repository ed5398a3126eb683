from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .. import config

Difficulty = Literal["easy", "medium", "hard", "impossible"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class BrandCreate(CamelModel):
    name: str = Field(..., min_length=1, description="Display name, also the expected answer")
    slug: str = Field(..., min_length=1, description="Unique identifier from the logo dataset")
    image_url: str = Field(..., min_length=1, description="Absolute URL of the logo artwork")
    difficulty: Difficulty
    has_text: bool = Field(
        default=False, description="Whether the artwork spells out the brand name"
    )


class BrandRecord(BrandCreate):
    id: int


class ScoreCreate(CamelModel):
    player_name: str = Field(
        ...,
        min_length=1,
        max_length=config.PLAYER_NAME_MAX_LENGTH,
        description="Name shown on the leaderboard",
    )
    score: int = Field(
        ...,
        ge=0,
        le=config.MAX_SCORE,
        strict=True,
        description="Points earned in the session",
    )
    difficulty: Difficulty


class ScoreRecord(ScoreCreate):
    id: int


class ErrorResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
