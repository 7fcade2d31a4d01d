# app/services/risk_service.py
"""
Open-bet aggregation and risk banding.

Everything here is pure: it works on already-loaded bet records (ORM ``Game``
rows or ``BetRecord`` schemas, anything with the same attributes) and never
touches the database.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from app.constants import RESULT_PENDING, GameType
from app.core.config import settings
from app.core.money import q2
from app.schemas.risk import BetAggregate, RiskLevel, RiskReport, RiskSummary, RiskThresholds

BetPredicate = Callable[[object], bool]


def is_open(bet) -> bool:
    """Unsettled: no result yet, or explicitly 'pending'."""
    result = getattr(bet, "result", None)
    return not result or result == RESULT_PENDING


def match_bet(
        game_mode: Optional[str] = None,
        prediction: Optional[str] = None,
        market_id: Optional[int] = None,
        game_type: Optional[str] = GameType.SATAMATKA,
) -> BetPredicate:
    """Build a predicate; a criterion left as None matches anything."""
    def _pred(bet) -> bool:
        if game_type is not None and getattr(bet, "game_type", None) != game_type:
            return False
        if market_id is not None and getattr(bet, "market_id", None) != market_id:
            return False
        if game_mode is not None and getattr(bet, "game_mode", None) != game_mode:
            return False
        if prediction is not None and getattr(bet, "prediction", None) != prediction:
            return False
        return True
    return _pred


def active_bets(bets: Iterable, predicate: Optional[BetPredicate] = None) -> List:
    return [b for b in bets if is_open(b) and (predicate is None or predicate(b))]


def aggregate(bets: Iterable, predicate: Optional[BetPredicate], multiplier) -> BetAggregate:
    """count / total / projected payout over the open bets matching `predicate`."""
    matched = active_bets(bets, predicate)
    total = sum(int(getattr(b, "bet_amount", 0) or 0) for b in matched)
    payout = q2(Decimal(total) * Decimal(str(multiplier)))
    return BetAggregate(
        count=len(matched),
        total_amount=total,
        potential_payout=float(payout),
        unique_users=len({b.user_id for b in matched}),
    )


def classify(total_amount, thresholds: RiskThresholds) -> RiskLevel:
    """
    Strict greater-than against high, then medium; anything else above zero is
    low. `thresholds.low` only marks the legend boundary.
    """
    if total_amount > thresholds.high:
        return RiskLevel.HIGH
    if total_amount > thresholds.medium:
        return RiskLevel.MEDIUM
    if total_amount > 0:
        return RiskLevel.LOW
    return RiskLevel.NONE


def default_thresholds() -> RiskThresholds:
    return RiskThresholds(
        high=settings.RISK_THRESHOLD_HIGH,
        medium=settings.RISK_THRESHOLD_MEDIUM,
        low=settings.RISK_THRESHOLD_LOW,
    )


def calculate_risk_summary(
        bets: List,
        odds,
        high_risk_amount: Optional[int] = None,
        game_type: str = GameType.SATAMATKA,
        game_type_formatted: str = "Market Game",
) -> RiskReport:
    """
    Liability over open bets, each priced with its own mode's multiplier from
    `odds` (an OddsBook). Exposure is tracked per user and per market.
    """
    if high_risk_amount is None:
        high_risk_amount = settings.HIGH_RISK_BET_AMOUNT

    user_exposure: Dict[int, Decimal] = {}
    market_exposure: Dict[int, Decimal] = {}
    total_amount = 0
    liability = Decimal("0")
    high_risk = 0

    open_bets = active_bets(bets)
    for b in open_bets:
        amount = int(b.bet_amount or 0)
        payout = Decimal(amount) * odds.multiplier_for(b.game_type, b.game_mode)

        total_amount += amount
        liability += payout
        if amount > high_risk_amount:
            high_risk += 1

        user_exposure[b.user_id] = user_exposure.get(b.user_id, Decimal("0")) + payout
        if b.market_id:
            market_exposure[b.market_id] = market_exposure.get(b.market_id, Decimal("0")) + payout

    summary = RiskSummary(
        total_bet_amount=total_amount,
        potential_liability=float(q2(liability)),
        potential_profit=float(q2(Decimal(total_amount) - liability)),
        exposure_amount=float(q2(max(user_exposure.values(), default=Decimal("0")))),
        active_bets=len(open_bets),
        total_bets=len(bets),
        high_risk_bets=high_risk,
        game_type=game_type,
        game_type_formatted=game_type_formatted,
    )
    return RiskReport(
        summary=summary,
        user_exposure={k: float(q2(v)) for k, v in user_exposure.items()},
        market_exposure={k: float(q2(v)) for k, v in market_exposure.items()},
    )
