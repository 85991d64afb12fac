"""
NameScout - AI Endpoint Pydantic Schemas
Payloads for name generation and the quota / cooldown status endpoints.
JSON field names are camelCase on the wire.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ═══════════════════════════════════════════════════════
#  /api/generate-names
# ═══════════════════════════════════════════════════════


class GenerateNamesRequest(BaseModel):
    """Input payload for AI-powered name suggestions."""

    model_config = {"extra": "forbid"}

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Name to find alternatives for",
        examples=["brightpath"],
    )
    count: int = Field(
        10,
        ge=1,
        le=30,
        description="How many suggestions to return",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class GenerateNamesResponse(BaseModel):
    suggestions: list[str]


class AdmissionDeniedResponse(BaseModel):
    """Body of a 429 from the admission gate."""

    model_config = {"populate_by_name": True}

    reason: str
    reset_time: Optional[datetime] = Field(None, alias="resetTime")
    retry_after: int = Field(..., alias="retryAfter")


# ═══════════════════════════════════════════════════════
#  Status endpoints
# ═══════════════════════════════════════════════════════


class RateLimitStatusResponse(BaseModel):
    model_config = {"populate_by_name": True}

    remaining: int
    total: int
    reset_time: datetime = Field(..., alias="resetTime")
    on_cooldown: bool = Field(..., alias="onCooldown")
    cooldown_remaining_ms: int = Field(0, alias="cooldownRemainingMs")


class CooldownStatusResponse(BaseModel):
    model_config = {"populate_by_name": True}

    on_cooldown: bool = Field(..., alias="onCooldown")
    remaining_ms: Optional[int] = Field(None, alias="remainingMs")
    remaining_seconds: Optional[int] = Field(None, alias="remainingSeconds")
