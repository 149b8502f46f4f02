from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from kazi.db import get_db_session
from kazi.dependencies import TokenClaims, get_current_claims, require_admin
from kazi.services.export_service import export_user_data
from kazi.logging_config import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/csv", tags=["csv"])


def _csv_response(content: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/download")
async def download_my_data(
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db_session)
):
    """Download the caller's profile, budgets and expenses as CSV"""
    user, content = await export_user_data(session, claims.user_id)
    return _csv_response(content, f"UserData_{user.id}.csv")


@router.get("/download/{user_id}")
async def download_user_data(
    user_id: int,
    claims: TokenClaims = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session)
):
    """Download any user's data as CSV (admin only)"""
    user, content = await export_user_data(session, user_id)
    logger.info(f"Admin {claims.user_id} exported data of user {user_id}")
    return _csv_response(content, f"UserData_{user.id}.csv")
