from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import UserRole
from app.core.auth import require_role
from app.db.session import get_session
from app.models.user import User
from app.schemas.odds import OddOut, OddsUpdateIn, OddsUpdateOut
from app.services.game_service import get_subadmin
from app.services.odds_service import list_odds, odd_out, upsert_game_odd

router = APIRouter(prefix="/api/odds", tags=["odds"])


@router.get("/admin", response_model=List[OddOut])
async def admin_odds(
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN, UserRole.SUBADMIN)),
):
    return await list_odds(session)


@router.get("/subadmin/{subadmin_id}", response_model=List[OddOut])
async def subadmin_odds(
        subadmin_id: int,
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN, UserRole.SUBADMIN)),
):
    """Effective odds for a subadmin: own rows, else admin rows, else defaults."""
    if current_user.role == UserRole.SUBADMIN and current_user.id != subadmin_id:
        raise HTTPException(403, "Unauthorized access")
    if await get_subadmin(session, subadmin_id) is None:
        raise HTTPException(404, "Subadmin not found")
    return await list_odds(session, subadmin_id)


async def _save_odds(session: AsyncSession, payload: OddsUpdateIn, subadmin_id=None) -> OddsUpdateOut:
    if not payload.odds:
        raise HTTPException(400, "odds must be a non-empty list")
    try:
        rows = []
        for it in payload.odds:
            rows.append(await upsert_game_odd(session, it.game_type, it.odd_value, it.scale, subadmin_id))
        await session.commit()
        return OddsUpdateOut(
            message="Odds settings updated successfully",
            results=[odd_out(r) for r in rows],
        )
    except HTTPException:
        await session.rollback(); raise
    except Exception:
        await session.rollback(); raise


@router.post("/admin", response_model=OddsUpdateOut)
async def set_admin_odds(
        payload: OddsUpdateIn,
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN)),
):
    return await _save_odds(session, payload)


@router.post("/subadmin/{subadmin_id}", response_model=OddsUpdateOut)
async def set_subadmin_odds(
        subadmin_id: int,
        payload: OddsUpdateIn,
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN)),
):
    if await get_subadmin(session, subadmin_id) is None:
        raise HTTPException(400, "Invalid subadmin ID")
    return await _save_odds(session, payload, subadmin_id)
