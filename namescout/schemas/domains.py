"""
NameScout - Domain Check Schemas
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CheckDomainRequest(BaseModel):
    """Input payload for /api/check-domain."""

    model_config = {"extra": "forbid"}

    name: str = Field(
        ...,
        min_length=1,
        max_length=63,
        description="Candidate brand name, without suffix",
        examples=["acme", "brightpath"],
    )
    tld: Optional[str] = Field(
        None,
        max_length=24,
        description="Single suffix to check; omit to check every popular suffix",
        examples=["com", "io"],
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("tld")
    @classmethod
    def normalise_tld(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower().lstrip(".")
        return v or None


class DomainResult(BaseModel):
    """Availability of one domain. ``available`` is None when undetermined."""

    domain: str
    tld: str
    available: Optional[bool] = None
    price: Optional[float] = None


class DomainCheckResponse(BaseModel):
    results: list[DomainResult]
