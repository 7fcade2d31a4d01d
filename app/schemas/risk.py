from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RiskLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JantriView(str, Enum):
    JODI = "jodi"
    HARF = "harf"
    ODD_EVEN = "odd_even"


# 投注记录（只读视图，ORM Game 或接口数据都可转换）
class BetRecord(BaseModel):
    id: int
    user_id: int
    market_id: Optional[int] = None
    game_type: str = "satamatka"
    game_mode: Optional[str] = None
    prediction: str
    bet_amount: int = 0            # paise
    result: Optional[str] = None   # None / 'pending' = open
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RiskThresholds(BaseModel):
    """Bet-amount boundaries in paise. Must be strictly decreasing high -> low and positive."""
    high: int = 1000
    medium: int = 500
    low: int = 100

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self):
        if not (self.high > self.medium > self.low > 0):
            raise ValueError(
                f"risk thresholds must satisfy high > medium > low > 0 "
                f"(got high={self.high}, medium={self.medium}, low={self.low})"
            )
        return self


class BetAggregate(BaseModel):
    count: int = 0
    total_amount: int = 0            # paise
    potential_payout: float = 0.0    # paise
    unique_users: int = 0


class RiskSummary(BaseModel):
    total_bet_amount: int = 0
    potential_liability: float = 0.0
    potential_profit: float = 0.0
    exposure_amount: float = 0.0
    active_bets: int = 0
    total_bets: int = 0
    high_risk_bets: int = 0
    game_type: str = "satamatka"
    game_type_formatted: str = "Market Game"


class RiskReport(BaseModel):
    summary: RiskSummary
    user_exposure: Dict[int, float] = Field(default_factory=dict)
    market_exposure: Dict[int, float] = Field(default_factory=dict)


class UserBrief(BaseModel):
    username: str


class MarketBrief(BaseModel):
    name: str
    type: str


class RiskManagementOut(BaseModel):
    summaries: List[RiskSummary]
    user_exposure: Dict[int, float]
    market_exposure: Dict[int, float]
    games: List[BetRecord]
    user_info: Dict[int, UserBrief]
    market_info: Dict[int, MarketBrief]
    message: Optional[str] = None


# 看板
class JantriCell(BaseModel):
    key: str                       # '07' | 'A3' | 'odd'
    bet_count: int
    total_amount: int
    potential_payout: float
    unique_users: int
    risk_level: RiskLevel
    color: str
    amount_display: str            # '₹2.00' or '-'
    payout_display: str


class JantriStats(BaseModel):
    total_bets: int
    total_bet_amount: int
    unique_users: int
    potential_win: float


class JantriBoard(BaseModel):
    view: JantriView
    market_id: Optional[int] = None
    multiplier: float
    thresholds: RiskThresholds
    show_empty_buckets: bool
    cells: List[JantriCell]
    stats: JantriStats
    generated_at: datetime
