import pytest

from app.constants import MarketStatus, UserRole
from conftest import auth


@pytest.fixture
async def world(make_user, make_market, make_game):
    admin = await make_user("admin", role=UserRole.ADMIN)
    sub = await make_user("sub", role=UserRole.SUBADMIN)
    lonely = await make_user("lonely", role=UserRole.SUBADMIN)
    p1 = await make_user("ravi", assigned_to=sub.id)
    p2 = await make_user("amit")
    m1 = await make_market("Gali", status=MarketStatus.OPEN)
    m2 = await make_market("Dishawar", status=MarketStatus.CLOSED, market_type="dishawar")

    await make_game(p1, m1, "05", 200)
    await make_game(p2, m1, "05", 300)
    await make_game(p1, m2, "07", 500)                 # closed market
    await make_game(p1, m1, "05", 400, result="05")    # settled
    await make_game(p2, m1, "A3", 150, game_mode="harf")
    return {"admin": admin, "sub": sub, "lonely": lonely, "p1": p1, "p2": p2, "m1": m1, "m2": m2}


async def test_requires_token(client):
    resp = await client.get("/api/risk/admin")
    assert resp.status_code == 401


async def test_player_is_forbidden(client, world):
    resp = await client.get("/api/risk/admin", headers=auth(world["p1"]))
    assert resp.status_code == 403


async def test_blocked_user_is_rejected(client, make_user):
    u = await make_user("gone", role=UserRole.ADMIN, is_blocked=True)
    resp = await client.get("/api/risk/admin", headers=auth(u))
    assert resp.status_code == 401


async def test_admin_risk(client, world):
    resp = await client.get("/api/risk/admin", headers=auth(world["admin"]))
    assert resp.status_code == 200
    body = resp.json()
    summary = body["summaries"][0]

    assert summary["total_bets"] == 4
    assert summary["active_bets"] == 3
    assert summary["total_bet_amount"] == 650
    # 500*90 + 150*9
    assert summary["potential_liability"] == 46350
    assert body["user_info"][str(world["p1"].id)] == {"username": "ravi"}
    assert body["market_info"] == {str(world["m1"].id): {"name": "Gali", "type": "gali"}}
    assert body["message"] is None


async def test_admin_risk_for_one_subadmin(client, world):
    resp = await client.get(
        "/api/risk/admin", params={"subadmin_id": world["sub"].id}, headers=auth(world["admin"])
    )
    assert resp.status_code == 200
    summary = resp.json()["summaries"][0]
    assert summary["total_bets"] == 2
    assert summary["total_bet_amount"] == 200


async def test_admin_risk_rejects_unknown_subadmin(client, world):
    resp = await client.get(
        "/api/risk/admin", params={"subadmin_id": world["p1"].id}, headers=auth(world["admin"])
    )
    assert resp.status_code == 400


async def test_subadmin_risk_is_scoped(client, world):
    resp = await client.get("/api/risk/subadmin", headers=auth(world["sub"]))
    assert resp.status_code == 200
    body = resp.json()
    assert {g["user_id"] for g in body["games"]} == {world["p1"].id}
    assert body["summaries"][0]["potential_liability"] == 18000


async def test_subadmin_without_players(client, world):
    resp = await client.get("/api/risk/subadmin", headers=auth(world["lonely"]))
    body = resp.json()
    assert body["message"] == "No assigned players found"
    assert body["summaries"][0]["total_bets"] == 0
    assert body["games"] == []


async def test_admin_cannot_use_subadmin_endpoint(client, world):
    resp = await client.get("/api/risk/subadmin", headers=auth(world["admin"]))
    assert resp.status_code == 403


async def test_jantri_jodi(client, world):
    resp = await client.get("/api/risk/jantri", headers=auth(world["admin"]))
    assert resp.status_code == 200
    board = resp.json()

    assert board["view"] == "jodi"
    assert board["thresholds"] == {"high": 1000, "medium": 500, "low": 100}
    assert [c["key"] for c in board["cells"]] == ["05"]
    cell = board["cells"][0]
    assert cell["total_amount"] == 500
    assert cell["bet_count"] == 2
    assert cell["risk_level"] == "low"
    assert cell["amount_display"] == "₹5.00"


async def test_jantri_custom_thresholds(client, world):
    resp = await client.get(
        "/api/risk/jantri",
        params={"high": 400, "medium": 300, "low": 100},
        headers=auth(world["admin"]),
    )
    assert resp.json()["cells"][0]["risk_level"] == "high"


async def test_jantri_rejects_unordered_thresholds(client, world):
    resp = await client.get(
        "/api/risk/jantri",
        params={"high": 100, "medium": 300, "low": 500},
        headers=auth(world["admin"]),
    )
    assert resp.status_code == 400
    assert "high > medium > low" in resp.json()["detail"]


async def test_jantri_harf_lists_all_buckets(client, world):
    resp = await client.get("/api/risk/jantri", params={"view": "harf"}, headers=auth(world["admin"]))
    cells = resp.json()["cells"]
    assert len(cells) == 20
    a3 = next(c for c in cells if c["key"] == "A3")
    assert a3["total_amount"] == 150
    assert a3["potential_payout"] == 1350


async def test_jantri_market_filter(client, world, make_market, make_game):
    m3 = await make_market("Mumbai", market_type="mumbai")
    await make_game(world["p2"], m3, "05", 900)
    resp = await client.get(
        "/api/risk/jantri", params={"market_id": m3.id}, headers=auth(world["admin"])
    )
    cells = resp.json()["cells"]
    assert [(c["key"], c["total_amount"]) for c in cells] == [("05", 900)]


async def test_jantri_bad_view(client, world):
    resp = await client.get("/api/risk/jantri", params={"view": "patti"}, headers=auth(world["admin"]))
    assert resp.status_code == 422


async def test_subadmin_jantri_scope(client, world):
    mine = await client.get("/api/risk/jantri", headers=auth(world["sub"]))
    assert [(c["key"], c["total_amount"]) for c in mine.json()["cells"]] == [("05", 200)]

    other = await client.get(
        "/api/risk/jantri", params={"subadmin_id": world["lonely"].id}, headers=auth(world["sub"])
    )
    assert other.status_code == 403
