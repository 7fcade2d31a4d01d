# app/services/odds_service.py
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import DEFAULT_MULTIPLIERS, DEFAULT_ODDS, ODDS_GAME_TYPES, odds_key
from app.core.money import q4
from app.models.game_odd import GameOdd
from app.schemas.odds import OddOut, OddsScale

logger = logging.getLogger(__name__)

E4 = Decimal("10000")
E1 = Decimal("10")


def normalize_odd_value(raw) -> Decimal:
    """
    旧数据没有单位标记，只能按数值大小猜：
      >= 10000 -> /10000   (19000 -> 1.9)
      >= 10    -> /10      (19    -> 1.9)
      其他原样            (1.9   -> 1.9)
    """
    v = Decimal(str(raw))
    if v >= E4:
        return v / E4
    if v >= E1:
        return v / E1
    return v


def to_multiplier(raw, scale: OddsScale | str | None) -> Decimal:
    """Resolve a stored odds value to its payout multiplier using the row's scale tag."""
    v = Decimal(str(raw))
    if scale is None:
        return normalize_odd_value(v)
    scale = OddsScale(scale)
    if scale == OddsScale.BASIS_POINTS_E4:
        return v / E4
    if scale == OddsScale.BASIS_POINTS_E1:
        return v / E1
    return v


class OddsBook:
    """game_odds key -> multiplier, pre-filled with the built-in defaults."""

    def __init__(self, multipliers: Optional[Dict[str, Decimal]] = None):
        self._multipliers: Dict[str, Decimal] = dict(DEFAULT_ODDS)
        if multipliers:
            self._multipliers.update(multipliers)

    def get(self, key: str) -> Optional[Decimal]:
        return self._multipliers.get(key)

    def multiplier_for(self, game_type: str, game_mode: Optional[str] = None) -> Decimal:
        key = odds_key(game_type, game_mode)
        if key in self._multipliers:
            return self._multipliers[key]
        if game_mode in DEFAULT_MULTIPLIERS:
            return DEFAULT_MULTIPLIERS[game_mode]
        return self._multipliers.get(game_type, Decimal("1"))

    def as_dict(self) -> Dict[str, Decimal]:
        return dict(self._multipliers)


async def _load_rows(session: AsyncSession, subadmin_id: Optional[int]) -> Dict[str, GameOdd]:
    """Active rows keyed by game_type; a subadmin's own row beats the admin row."""
    rs = await session.execute(
        select(GameOdd)
        .where(GameOdd.is_active.is_(True), GameOdd.set_by_admin.is_(True))
        .order_by(GameOdd.id.asc())
    )
    rows: Dict[str, GameOdd] = {r.game_type: r for r in rs.scalars().all()}

    if subadmin_id:
        rs = await session.execute(
            select(GameOdd)
            .where(
                GameOdd.is_active.is_(True),
                GameOdd.set_by_admin.is_(False),
                GameOdd.subadmin_id == subadmin_id,
            )
            .order_by(GameOdd.id.asc())
        )
        for r in rs.scalars().all():
            rows[r.game_type] = r
    return rows


async def load_odds_book(session: AsyncSession, subadmin_id: Optional[int] = None) -> OddsBook:
    rows = await _load_rows(session, subadmin_id)
    return OddsBook({k: to_multiplier(r.odd_value, r.scale) for k, r in rows.items()})


def odd_out(row: GameOdd) -> OddOut:
    return OddOut(
        game_type=row.game_type,
        odd_value=float(row.odd_value),
        scale=OddsScale(row.scale) if row.scale else None,
        multiplier=float(q4(to_multiplier(row.odd_value, row.scale))),
        set_by_admin=bool(row.set_by_admin),
        subadmin_id=row.subadmin_id,
    )


async def list_odds(session: AsyncSession, subadmin_id: Optional[int] = None) -> List[OddOut]:
    """Effective odds for every known game type; missing ones fall back to defaults."""
    rows = await _load_rows(session, subadmin_id)
    out: List[OddOut] = []
    for game_type in ODDS_GAME_TYPES:
        row = rows.pop(game_type, None)
        if row is not None:
            out.append(odd_out(row))
            continue
        default = DEFAULT_ODDS[game_type]
        out.append(OddOut(
            game_type=game_type,
            odd_value=float(default),
            scale=OddsScale.DECIMAL,
            multiplier=float(default),
            set_by_admin=True,
        ))
    # 非标准玩法也一并返回
    out.extend(odd_out(r) for r in rows.values())
    return out


async def upsert_game_odd(
        session: AsyncSession,
        game_type: str,
        odd_value: Decimal,
        scale: OddsScale,
        subadmin_id: Optional[int] = None,
) -> GameOdd:
    """Insert or update one odds row. Caller commits."""
    set_by_admin = subadmin_id is None
    stmt = select(GameOdd).where(
        GameOdd.game_type == game_type,
        GameOdd.set_by_admin.is_(set_by_admin),
    )
    if set_by_admin:
        stmt = stmt.where(GameOdd.subadmin_id.is_(None))
    else:
        stmt = stmt.where(GameOdd.subadmin_id == subadmin_id)
    row = (await session.execute(stmt.order_by(GameOdd.id.desc()))).scalars().first()

    if row:
        row.odd_value = float(q4(odd_value))
        row.scale = OddsScale(scale).value
        row.is_active = True
    else:
        row = GameOdd(
            game_type=game_type,
            odd_value=float(q4(odd_value)),
            scale=OddsScale(scale).value,
            set_by_admin=set_by_admin,
            subadmin_id=subadmin_id,
            is_active=True,
        )
        session.add(row)
    await session.flush()
    logger.info("odds %s=%s (%s) saved for %s", game_type, odd_value, scale, subadmin_id or "admin")
    return row
