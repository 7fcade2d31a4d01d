from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.db.session import get_session
from app.models.user import User
from app.schemas.market import MarketOut
from app.services.game_service import list_markets

router = APIRouter(prefix="/api/markets", tags=["markets"])

@router.get("", response_model=List[MarketOut])
async def markets(
        status: Optional[str] = Query(None, description="waiting | open | closed | resulted | settled"),
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(get_current_user),
):
    rows = await list_markets(session, status)
    return [MarketOut.model_validate(m) for m in rows]
