# app/models/game_odd.py
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Numeric, Boolean, DateTime, func
from app.db.session import Base

class GameOdd(Base):
    __tablename__ = "game_odds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_type: Mapped[str] = mapped_column(String(32), index=True)  # 'satamatka_jodi' | 'cricket_toss' ...
    odd_value: Mapped[float] = mapped_column(Numeric(14, 4), nullable=False)
    # basis_points_e4 | basis_points_e1 | decimal; NULL on legacy rows
    scale: Mapped[str | None] = mapped_column(String(24))
    set_by_admin: Mapped[bool] = mapped_column(Boolean, default=True)
    subadmin_id: Mapped[int | None] = mapped_column(Integer, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
