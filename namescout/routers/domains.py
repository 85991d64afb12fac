"""
NameScout - Domain Availability Router
POST /api/check-domain checks one suffix, or every popular suffix when
none is given.
"""
from typing import Union

from fastapi import APIRouter, Depends, HTTPException

from namescout.dependencies import get_domain_checker
from namescout.schemas.domains import CheckDomainRequest, DomainCheckResponse, DomainResult
from namescout.services.domain_checker import DomainChecker, clean_domain_name

router = APIRouter(prefix="/api", tags=["Domains"])


@router.post("/check-domain", response_model=Union[DomainResult, DomainCheckResponse])
async def check_domain(
    payload: CheckDomainRequest,
    checker: DomainChecker = Depends(get_domain_checker),
):
    name = clean_domain_name(payload.name)
    if not name:
        raise HTTPException(status_code=400, detail="Name must contain letters, digits or hyphens")

    if payload.tld:
        return await checker.check(name, payload.tld)

    results = await checker.check_popular(name)
    return DomainCheckResponse(results=results)
