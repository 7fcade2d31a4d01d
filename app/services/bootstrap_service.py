from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.db.session import engine, Base
from app.constants import DEFAULT_ODDS
from app.models.game_odd import GameOdd
from app.schemas.odds import OddsScale

# 建表前确保模型已注册到 Base.metadata
from app.models import game, game_odd, market, user  # noqa: F401

async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def ensure_default_odds(session: AsyncSession) -> int:
    """Seed admin odds rows for game types that have none. Returns rows added."""
    res = await session.execute(
        select(GameOdd.game_type).where(GameOdd.set_by_admin.is_(True), GameOdd.subadmin_id.is_(None))
    )
    existing = set(res.scalars().all())
    added = 0
    for game_type, value in DEFAULT_ODDS.items():
        if game_type in existing:
            continue
        session.add(GameOdd(
            game_type=game_type,
            odd_value=float(value),
            scale=OddsScale.DECIMAL.value,
            set_by_admin=True,
            subadmin_id=None,
            is_active=True,
        ))
        added += 1
    if added:
        await session.commit()
    return added
