"""
NameScout - AI Router
  1. POST /api/generate-names     - brandable alternatives from Gemini,
                                    behind the admission gate
  2. GET  /api/rate-limit-status  - read-only daily quota + caller cooldown
  3. GET  /api/check-cooldown     - read-only caller cooldown
"""
import logging
import math
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from starlette.concurrency import run_in_threadpool

from namescout.dependencies import client_identity, get_admission_gate, get_name_generator
from namescout.errors import AdmissionDenied
from namescout.schemas.ai import (
    CooldownStatusResponse,
    GenerateNamesRequest,
    GenerateNamesResponse,
    RateLimitStatusResponse,
)
from namescout.services.ai_quota import AdmissionGate
from namescout.services.name_generator import (
    NameGenerator,
    NameGeneratorError,
    NameGeneratorUnavailable,
)

logger = logging.getLogger("namescout.ai")

router = APIRouter(prefix="/api", tags=["AI"])


def _epoch_ms(value: datetime) -> str:
    return str(int(value.timestamp() * 1000))


# ═══════════════════════════════════════════════════════
#  Endpoint 1: Name suggestions
# ═══════════════════════════════════════════════════════


@router.post("/generate-names", response_model=GenerateNamesResponse)
async def generate_names(
    payload: GenerateNamesRequest,
    response: Response,
    client_id: str = Depends(client_identity),
    gate: AdmissionGate = Depends(get_admission_gate),
    generator: NameGenerator = Depends(get_name_generator),
):
    """
    Generate brandable alternatives for a name.

    The daily slot is consumed at admission; a failed model call still
    counts against the quota.
    """
    decision = await run_in_threadpool(gate.request_expensive_operation, client_id)
    if not decision.allowed:
        raise AdmissionDenied(decision)

    response.headers["X-Quota-Remaining"] = str(decision.remaining or 0)
    response.headers["X-Quota-Limit"] = str(gate.quota.daily_limit)
    response.headers["X-Quota-Reset"] = _epoch_ms(decision.reset_time)

    try:
        suggestions = await generator.generate(payload.name, payload.count)
    except NameGeneratorUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except NameGeneratorError as exc:
        raise HTTPException(status_code=502, detail=f"AI service error: {exc}")

    logger.info("Generated %d suggestion(s) for %r", len(suggestions), payload.name)
    return GenerateNamesResponse(suggestions=suggestions)


# ═══════════════════════════════════════════════════════
#  Endpoint 2 & 3: Status (never consumes quota)
# ═══════════════════════════════════════════════════════


@router.get("/rate-limit-status", response_model=RateLimitStatusResponse)
async def rate_limit_status(
    response: Response,
    client_id: str = Depends(client_identity),
    gate: AdmissionGate = Depends(get_admission_gate),
):
    quota, cooldown = await run_in_threadpool(gate.status, client_id)

    response.headers["X-Quota-Remaining"] = str(quota.remaining)
    response.headers["X-Quota-Limit"] = str(quota.total)
    response.headers["X-Quota-Reset"] = _epoch_ms(quota.reset_time)

    return RateLimitStatusResponse(
        remaining=quota.remaining,
        total=quota.total,
        reset_time=quota.reset_time,
        on_cooldown=not cooldown.allowed,
        cooldown_remaining_ms=cooldown.remaining_ms or 0,
    )


@router.get(
    "/check-cooldown",
    response_model=CooldownStatusResponse,
    response_model_exclude_none=True,
)
async def check_cooldown(
    client_id: str = Depends(client_identity),
    gate: AdmissionGate = Depends(get_admission_gate),
):
    cooldown = await run_in_threadpool(gate.cooldown.check_cooldown, client_id)
    if cooldown.allowed:
        return CooldownStatusResponse(on_cooldown=False)

    return CooldownStatusResponse(
        on_cooldown=True,
        remaining_ms=cooldown.remaining_ms,
        remaining_seconds=math.ceil((cooldown.remaining_ms or 0) / 1000),
    )
