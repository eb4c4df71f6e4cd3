from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from stockyapi.models.base import Base


class StockPrice(Base):
    """가격 갱신 작업이 기록하는 종목별 최신 (모의) 시세"""

    __tablename__ = "stock_prices"

    stock_symbol: Mapped[str] = mapped_column(String(32), primary_key=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, comment="UTC"
    )

    def __repr__(self):
        return f"<StockPrice(symbol='{self.stock_symbol}', price={self.price})>"
