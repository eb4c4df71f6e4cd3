from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from stockyapi.models.base import Base


class StockAdjustment(Base):
    """
    종목별 기업 이벤트 조정 (액면분할 배수, 상장폐지)

    종목당 최신 레코드 하나만 유지하며 upsert 시 이전 값은 덮어씁니다.
    """

    __tablename__ = "stock_adjustments"

    stock_symbol: Mapped[str] = mapped_column(String(32), primary_key=True)
    multiplier: Mapped[Decimal] = mapped_column(
        Numeric(30, 12), nullable=False, default=Decimal("1.0")
    )
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    delisted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<StockAdjustment(symbol='{self.stock_symbol}', multiplier={self.multiplier}, effective={self.effective_date}, delisted={self.delisted})>"
