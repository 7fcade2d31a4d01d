# app/constants.py
from decimal import Decimal


class UserRole:
    ADMIN = "admin"
    SUBADMIN = "subadmin"
    PLAYER = "player"


class GameType:
    COIN_FLIP = "coin_flip"
    SATAMATKA = "satamatka"
    CRICKET_TOSS = "cricket_toss"


class GameMode:
    JODI = "jodi"          # 00..99
    HARF = "harf"          # A0..A9 left digit, B0..B9 right digit
    CROSSING = "crossing"
    ODD_EVEN = "odd_even"  # "odd" | "even"


class MarketStatus:
    WAITING = "waiting"
    OPEN = "open"
    CLOSED = "closed"
    RESULTED = "resulted"
    SETTLED = "settled"


RESULT_PENDING = "pending"

# payout multipliers used when no odds row exists
DEFAULT_MULTIPLIERS = {
    GameMode.JODI: Decimal("90"),
    GameMode.HARF: Decimal("9"),
    GameMode.CROSSING: Decimal("95"),
    GameMode.ODD_EVEN: Decimal("1.9"),
}

ODDS_GAME_TYPES = (
    GameType.COIN_FLIP,
    GameType.CRICKET_TOSS,
    "satamatka_jodi",
    "satamatka_harf",
    "satamatka_odd_even",
    "satamatka_crossing",
)

DEFAULT_ODDS = {
    GameType.COIN_FLIP: Decimal("1.9"),
    GameType.CRICKET_TOSS: Decimal("1.9"),
    "satamatka_jodi": DEFAULT_MULTIPLIERS[GameMode.JODI],
    "satamatka_harf": DEFAULT_MULTIPLIERS[GameMode.HARF],
    "satamatka_odd_even": DEFAULT_MULTIPLIERS[GameMode.ODD_EVEN],
    "satamatka_crossing": DEFAULT_MULTIPLIERS[GameMode.CROSSING],
}


def odds_key(game_type: str, game_mode: str | None = None) -> str:
    """game_odds key, e.g. ('satamatka', 'odd_even') -> 'satamatka_odd_even'."""
    if game_mode:
        return f"{game_type}_{game_mode}"
    return game_type
