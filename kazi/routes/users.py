from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db import get_db_session
from kazi.dependencies import TokenClaims, get_clock, get_current_claims
from kazi.schemas.user import UserResponse, ProfileUpdate, ChangePasswordRequest
from kazi.services.profile_service import ProfileService
from kazi.utils.date_utils import Clock
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/user", tags=["user"])


def get_profile_service(
    session: AsyncSession = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> ProfileService:
    return ProfileService(session, clock=clock)


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    claims: TokenClaims = Depends(get_current_claims),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Get current authenticated user's profile"""
    return await profile_service.get_profile(claims.user_id)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Update current authenticated user's profile and notify them"""
    return await profile_service.update_profile(claims.user_id, profile_data.model_dump())


@router.put("/profile/change-password")
async def change_password(
    password_data: ChangePasswordRequest,
    claims: TokenClaims = Depends(get_current_claims),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Change the password after verifying the old one"""
    await profile_service.change_password(
        claims.user_id, password_data.old_password, password_data.new_password
    )
    return {"message": "Password changed successfully."}
