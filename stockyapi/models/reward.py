from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from stockyapi.models.base import Base


class Reward(Base):
    """
    주식 리워드 이벤트 (append-only)

    한 사용자에게 특정 종목 주식을 지급한 단일 이벤트입니다.
    같은 사용자/종목/영업일 조합은 한 번만 기록됩니다.
    """

    __tablename__ = "rewards"

    id: Mapped[int] = mapped_column(
        # sqlite only autoincrements INTEGER PRIMARY KEY
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    stock_symbol: Mapped[str] = mapped_column(String(32), nullable=False)
    # 원본 정밀도 유지, 반올림은 평가 시점에만
    shares: Mapped[Decimal] = mapped_column(Numeric(30, 12), nullable=False)
    reward_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, comment="UTC"
    )
    reward_date: Mapped[date] = mapped_column(
        Date, nullable=False, comment="영업 타임존 기준 지급일"
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "stock_symbol", "reward_date", name="uq_rewards_user_symbol_day"
        ),
        Index("ix_rewards_user_date", "user_id", "reward_date"),
        Index("ix_rewards_stock_symbol", "stock_symbol"),
    )

    def __repr__(self):
        return f"<Reward(id={self.id}, user='{self.user_id}', symbol='{self.stock_symbol}', shares={self.shares})>"
