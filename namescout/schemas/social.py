"""
NameScout - Social Handle Schemas
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class CheckSocialRequest(BaseModel):
    """Input payload for /api/check-social."""

    model_config = {"extra": "forbid"}

    username: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Handle to look up on every platform",
        examples=["acme", "bright.path"],
    )

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username is required")
        return v.strip()


class SocialResult(BaseModel):
    platform: str
    url: Optional[str] = None
    available: Optional[bool] = None
    status: Literal["available", "taken", "unknown", "error"]


class SocialCheckResponse(BaseModel):
    results: list[SocialResult]
