from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import UserRole
from app.core.auth import require_role
from app.core.config import settings
from app.db.session import get_session
from app.models.user import User
from app.schemas.risk import (
    BetRecord, JantriBoard, JantriView, RiskManagementOut, RiskSummary, RiskThresholds,
)
from app.services.game_service import (
    get_assigned_player_ids, get_subadmin, load_market_games, load_market_info,
    load_scoped_games, load_user_info,
)
from app.services.jantri_service import build_jantri
from app.services.odds_service import OddsBook, load_odds_book
from app.services.risk_service import calculate_risk_summary

router = APIRouter(prefix="/api/risk", tags=["risk"])


def get_thresholds(
        high: int = Query(settings.RISK_THRESHOLD_HIGH, description="high risk above (paise)"),
        medium: int = Query(settings.RISK_THRESHOLD_MEDIUM, description="medium risk above (paise)"),
        low: int = Query(settings.RISK_THRESHOLD_LOW, description="low risk legend boundary (paise)"),
) -> RiskThresholds:
    try:
        return RiskThresholds(high=high, medium=medium, low=low)
    except ValidationError as e:
        raise HTTPException(400, e.errors()[0]["msg"]) from e


async def _ensure_subadmin(session: AsyncSession, subadmin_id: int) -> None:
    if await get_subadmin(session, subadmin_id) is None:
        raise HTTPException(400, "Invalid subadmin ID")


async def _risk_payload(
        session: AsyncSession,
        games: List[BetRecord],
        odds: OddsBook,
        message: Optional[str] = None,
) -> RiskManagementOut:
    report = calculate_risk_summary(games, odds)
    user_info = await load_user_info(session, report.user_exposure.keys())
    market_info = await load_market_info(session, report.market_exposure.keys())
    return RiskManagementOut(
        summaries=[report.summary],
        user_exposure=report.user_exposure,
        market_exposure=report.market_exposure,
        games=games,
        user_info=user_info,
        market_info=market_info,
        message=message,
    )


@router.get("/admin", response_model=RiskManagementOut)
async def admin_risk(
        subadmin_id: Optional[int] = Query(None, description="only this subadmin's players"),
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN)),
):
    """Platform-wide exposure on open markets, optionally narrowed to one subadmin."""
    if subadmin_id:
        await _ensure_subadmin(session, subadmin_id)
    games = await load_scoped_games(session, subadmin_id)
    odds = await load_odds_book(session)
    return await _risk_payload(session, games, odds)


@router.get("/subadmin", response_model=RiskManagementOut)
async def subadmin_risk(
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.SUBADMIN)),
):
    player_ids = await get_assigned_player_ids(session, current_user.id)
    if not player_ids:
        return RiskManagementOut(
            summaries=[RiskSummary()],
            user_exposure={},
            market_exposure={},
            games=[],
            user_info={},
            market_info={},
            message="No assigned players found",
        )
    games = await load_market_games(session, player_ids)
    odds = await load_odds_book(session, current_user.id)
    return await _risk_payload(session, games, odds)


@router.get("/jantri", response_model=JantriBoard)
async def jantri(
        view: JantriView = Query(JantriView.JODI),
        market_id: Optional[int] = Query(None),
        subadmin_id: Optional[int] = Query(None, description="admin only: narrow to one subadmin"),
        show_empty: Optional[bool] = Query(None, description="list buckets with no open bets"),
        thresholds: RiskThresholds = Depends(get_thresholds),
        session: AsyncSession = Depends(get_session),
        current_user: User = Depends(require_role(UserRole.ADMIN, UserRole.SUBADMIN)),
):
    """Per-number exposure grid (jodi 00-99, harf A0-B9, odd/even)."""
    if current_user.role == UserRole.SUBADMIN:
        if subadmin_id and subadmin_id != current_user.id:
            raise HTTPException(403, "Unauthorized access")
        scope = current_user.id
        odds = await load_odds_book(session, current_user.id)
    else:
        if subadmin_id:
            await _ensure_subadmin(session, subadmin_id)
        scope = subadmin_id
        odds = await load_odds_book(session)

    games = await load_scoped_games(session, scope)
    return build_jantri(
        games,
        view,
        odds,
        thresholds,
        market_id=market_id,
        show_empty_buckets=show_empty,
    )
