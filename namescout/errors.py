"""
NameScout - Application Errors
Admission denials are raised from the router and rendered here into the
429 contract: Retry-After header plus a JSON reason / reset hint.
"""
from fastapi import Request
from fastapi.responses import JSONResponse

from namescout.schemas.ai import AdmissionDeniedResponse
from namescout.services.ai_quota import AdmissionDecision


class AdmissionDenied(Exception):
    """The admission gate refused an expensive operation."""

    def __init__(self, decision: AdmissionDecision):
        super().__init__(decision.reason)
        self.decision = decision


async def admission_denied_handler(request: Request, exc: AdmissionDenied) -> JSONResponse:
    decision = exc.decision
    body = AdmissionDeniedResponse(
        reason=decision.reason or "Rate limit exceeded",
        reset_time=decision.reset_time,
        retry_after=decision.retry_after,
    )
    return JSONResponse(
        status_code=429,
        content=body.model_dump(mode="json", by_alias=True),
        headers={"Retry-After": str(decision.retry_after)},
    )
