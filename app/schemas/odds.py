from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class OddsScale(str, Enum):
    BASIS_POINTS_E4 = "basis_points_e4"   # 19000 -> 1.9
    BASIS_POINTS_E1 = "basis_points_e1"   # 19 -> 1.9
    DECIMAL = "decimal"                   # 1.9 -> 1.9


# 写入：数值 + 单位标记
class OddIn(BaseModel):
    game_type: str = Field(min_length=1, max_length=32)   # 'satamatka_jodi' ...
    odd_value: Decimal = Field(gt=0)
    scale: OddsScale = OddsScale.DECIMAL


class OddsUpdateIn(BaseModel):
    odds: List[OddIn]


class OddOut(BaseModel):
    game_type: str
    odd_value: float               # raw stored value
    scale: Optional[OddsScale] = None
    multiplier: float              # resolved payout multiplier
    set_by_admin: bool = True
    subadmin_id: Optional[int] = None


class OddsUpdateOut(BaseModel):
    success: bool = True
    message: str
    results: List[OddOut]
