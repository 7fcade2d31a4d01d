from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime, func
from app.db.session import Base

class Game(Base):
    """One placed bet. `result` stays NULL (or 'pending') until settlement."""
    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    game_type: Mapped[str] = mapped_column(String(32), nullable=False, default="satamatka")
    game_mode: Mapped[str | None] = mapped_column(String(16))  # jodi | harf | crossing | odd_even
    market_id: Mapped[int | None] = mapped_column(Integer, index=True)
    prediction: Mapped[str] = mapped_column(String(16), nullable=False)  # '00'..'99' | 'A0'..'B9' | 'odd' | 'even'
    bet_amount: Mapped[int] = mapped_column(Integer, nullable=False)  # paise
    result: Mapped[str | None] = mapped_column(String(16))
    payout: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now()
    )
