import itertools
import os
import tempfile

# 测试库：必须在导入 app 之前设置
_DB_PATH = os.path.join(tempfile.gettempdir(), f"jantri_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["JWT_SECRET"] = "jantri-test-secret-with-enough-length"

import httpx
import pytest

from app.constants import GameType, MarketStatus, UserRole
from app.core.security import create_access_token
from app.db.session import AsyncSessionLocal, Base, engine
from app.main import app
from app.models.game import Game
from app.models.market import SatamatkaMarket
from app.models.user import User
from app.schemas.risk import BetRecord
from app.services.bootstrap_service import init_db


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def bet():
    """BetRecord factory for the pure services."""
    ids = itertools.count(1)

    def _make(prediction, bet_amount=100, game_mode="jodi", result=None,
              user_id=1, market_id=1, game_type=GameType.SATAMATKA):
        return BetRecord(
            id=next(ids),
            user_id=user_id,
            market_id=market_id,
            game_type=game_type,
            game_mode=game_mode,
            prediction=prediction,
            bet_amount=bet_amount,
            result=result,
        )
    return _make


@pytest.fixture
async def session():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db()
    async with AsyncSessionLocal() as s:
        yield s
    await engine.dispose()


@pytest.fixture
async def client(session):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_user(session):
    async def _make(username, role=UserRole.PLAYER, assigned_to=None, is_blocked=False):
        u = User(username=username, role=role, assigned_to=assigned_to, is_blocked=is_blocked, balance=0)
        session.add(u)
        await session.commit()
        return u
    return _make


@pytest.fixture
def make_market(session):
    async def _make(name, status=MarketStatus.OPEN, market_type="gali"):
        m = SatamatkaMarket(name=name, type=market_type, status=status)
        session.add(m)
        await session.commit()
        return m
    return _make


@pytest.fixture
def make_game(session):
    async def _make(user, market, prediction, bet_amount, game_mode="jodi", result=None):
        g = Game(
            user_id=user.id,
            market_id=market.id if market else None,
            game_type=GameType.SATAMATKA,
            game_mode=game_mode,
            prediction=prediction,
            bet_amount=bet_amount,
            result=result,
        )
        session.add(g)
        await session.commit()
        return g
    return _make
