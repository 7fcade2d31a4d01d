# app/services/game_service.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import GameType, MarketStatus, UserRole
from app.models.game import Game
from app.models.market import SatamatkaMarket
from app.models.user import User
from app.schemas.risk import BetRecord, MarketBrief, UserBrief

logger = logging.getLogger(__name__)


async def get_subadmin(session: AsyncSession, subadmin_id: int) -> Optional[User]:
    u = await session.get(User, subadmin_id)
    if u is None or u.role != UserRole.SUBADMIN:
        return None
    return u


async def get_assigned_player_ids(session: AsyncSession, subadmin_id: int) -> List[int]:
    rs = await session.execute(select(User.id).where(User.assigned_to == subadmin_id))
    return [int(uid) for uid in rs.scalars().all()]


async def load_market_games(
        session: AsyncSession,
        user_ids: Optional[Iterable[int]] = None,
        open_markets_only: bool = True,
) -> List[BetRecord]:
    """
    Satamatka bets, optionally limited to `user_ids`. With `open_markets_only`
    only bets placed on currently open markets are returned.
    """
    stmt = select(Game).where(Game.game_type == GameType.SATAMATKA)
    if user_ids is not None:
        ids = list(user_ids)
        if not ids:
            return []
        stmt = stmt.where(Game.user_id.in_(ids))
    if open_markets_only:
        open_ids = select(SatamatkaMarket.id).where(SatamatkaMarket.status == MarketStatus.OPEN)
        stmt = stmt.where(Game.market_id.in_(open_ids))

    rs = await session.execute(stmt.order_by(Game.id.asc()))
    return [BetRecord.model_validate(g) for g in rs.scalars().all()]


async def load_scoped_games(session: AsyncSession, subadmin_id: Optional[int] = None) -> List[BetRecord]:
    """Platform-wide bets, or only those of the players assigned to `subadmin_id`."""
    if not subadmin_id:
        return await load_market_games(session)
    player_ids = await get_assigned_player_ids(session, subadmin_id)
    games = await load_market_games(session, player_ids)
    logger.info("subadmin %s: %d players, %d market games", subadmin_id, len(player_ids), len(games))
    return games


async def load_user_info(session: AsyncSession, user_ids: Iterable[int]) -> Dict[int, UserBrief]:
    ids = list(set(user_ids))
    if not ids:
        return {}
    rs = await session.execute(select(User.id, User.username).where(User.id.in_(ids)))
    return {uid: UserBrief(username=name) for uid, name in rs.all()}


async def load_market_info(session: AsyncSession, market_ids: Iterable[int]) -> Dict[int, MarketBrief]:
    ids = list(set(market_ids))
    if not ids:
        return {}
    rs = await session.execute(
        select(SatamatkaMarket.id, SatamatkaMarket.name, SatamatkaMarket.type)
        .where(SatamatkaMarket.id.in_(ids))
    )
    return {mid: MarketBrief(name=name, type=mtype) for mid, name, mtype in rs.all()}


async def list_markets(session: AsyncSession, status: Optional[str] = None) -> List[SatamatkaMarket]:
    stmt = select(SatamatkaMarket)
    if status:
        stmt = stmt.where(SatamatkaMarket.status == status)
    rs = await session.execute(stmt.order_by(SatamatkaMarket.id.asc()))
    return list(rs.scalars().all())
