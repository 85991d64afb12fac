"""
NameScout - Social Handle Router
POST /api/check-social checks every catalogued platform for a username.
"""
from fastapi import APIRouter, Depends, HTTPException

from namescout.dependencies import get_social_checker
from namescout.schemas.social import CheckSocialRequest, SocialCheckResponse
from namescout.services.social_checker import SocialChecker, clean_username

router = APIRouter(prefix="/api", tags=["Social"])


@router.post("/check-social", response_model=SocialCheckResponse)
async def check_social(
    payload: CheckSocialRequest,
    checker: SocialChecker = Depends(get_social_checker),
):
    username = clean_username(payload.username)
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")

    return SocialCheckResponse(results=await checker.check(username))
