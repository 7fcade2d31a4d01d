# app/services/jantri_service.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from app.constants import GameMode, GameType
from app.core.money import format_rupees
from app.core.timeutil import now_local
from app.schemas.risk import (
    BetAggregate, JantriBoard, JantriCell, JantriStats, JantriView, RiskLevel, RiskThresholds,
)
from app.services.risk_service import active_bets, aggregate, classify, match_bet

logger = logging.getLogger(__name__)

EMPTY = "-"

JODI_NUMBERS: Tuple[str, ...] = tuple(f"{i:02d}" for i in range(100))
HARF_BUCKETS: Tuple[str, ...] = (
    tuple(f"A{d}" for d in range(10))     # 左位
    + tuple(f"B{d}" for d in range(10))   # 右位
)
ODD_EVEN_BUCKETS: Tuple[str, ...] = ("odd", "even")

# view -> (game mode, bucket domain, show empty buckets by default)
VIEWS: Dict[JantriView, Tuple[str, Tuple[str, ...], bool]] = {
    JantriView.JODI: (GameMode.JODI, JODI_NUMBERS, False),
    JantriView.HARF: (GameMode.HARF, HARF_BUCKETS, True),
    JantriView.ODD_EVEN: (GameMode.ODD_EVEN, ODD_EVEN_BUCKETS, True),
}

RISK_COLORS = {
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "orange",
    RiskLevel.LOW: "green",
    RiskLevel.NONE: "gray",
}


def render_cell(key: str, agg: BetAggregate, thresholds: RiskThresholds) -> JantriCell:
    level = classify(agg.total_amount, thresholds)
    return JantriCell(
        key=key,
        bet_count=agg.count,
        total_amount=agg.total_amount,
        potential_payout=agg.potential_payout,
        unique_users=agg.unique_users,
        risk_level=level,
        color=RISK_COLORS[level],
        amount_display=format_rupees(agg.total_amount) if agg.count else EMPTY,
        payout_display=format_rupees(agg.potential_payout) if agg.count else EMPTY,
    )


def view_stats(bets: List, game_mode: str, market_id: Optional[int], multiplier) -> JantriStats:
    agg = aggregate(bets, match_bet(game_mode=game_mode, market_id=market_id), multiplier)
    return JantriStats(
        total_bets=agg.count,
        total_bet_amount=agg.total_amount,
        unique_users=agg.unique_users,
        potential_win=agg.potential_payout,
    )


def build_jantri(
        bets: List,
        view: JantriView,
        odds,
        thresholds: RiskThresholds,
        market_id: Optional[int] = None,
        show_empty_buckets: Optional[bool] = None,
) -> JantriBoard:
    """
    One cell per bucket of the view's fixed domain. `show_empty_buckets=None`
    keeps each view's own default (jodi hides empty numbers, harf and odd/even
    always list every bucket).
    """
    view = JantriView(view)
    game_mode, domain, show_default = VIEWS[view]
    show_empty = show_default if show_empty_buckets is None else show_empty_buckets
    multiplier = odds.multiplier_for(GameType.SATAMATKA, game_mode)

    # 先按模式/市场筛一次，避免每个号码都扫全量
    candidates = active_bets(bets, match_bet(game_mode=game_mode, market_id=market_id))

    cells: List[JantriCell] = []
    for key in domain:
        agg = aggregate(candidates, match_bet(prediction=key, game_type=None), multiplier)
        if agg.count == 0 and not show_empty:
            continue
        cells.append(render_cell(key, agg, thresholds))

    logger.debug("jantri %s market=%s: %d cells", view.value, market_id, len(cells))
    return JantriBoard(
        view=view,
        market_id=market_id,
        multiplier=float(multiplier),
        thresholds=thresholds,
        show_empty_buckets=show_empty,
        cells=cells,
        stats=view_stats(candidates, game_mode, market_id, multiplier),
        generated_at=now_local(),
    )
