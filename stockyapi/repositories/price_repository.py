"""
가격 캐시 리포지토리

가격 갱신 작업(PriceRefresher)만 기록하고, 평가 서비스는 읽기만 합니다.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockyapi.models.stock_price import StockPrice as StockPriceModel
from stockyapi.repositories.base import BaseRepository
from stockyapi.schemas.price import PriceEntry
from stockyapi.utils.timezone_utils import ensure_utc


class PriceRepository(BaseRepository[StockPriceModel, PriceEntry]):
    def __init__(self, db: Session):
        super().__init__(StockPriceModel, PriceEntry, db)

    def get(self, stock_symbol: str) -> Optional[Decimal]:
        entry = self.get_by_field("stock_symbol", stock_symbol)
        return entry.price if entry else None

    def get_many(self, symbols: Iterable[str]) -> Dict[str, Decimal]:
        symbols = set(symbols)
        if not symbols:
            return {}
        try:
            rows = (
                self.db.query(self.model_class.stock_symbol, self.model_class.price)
                .filter(self.model_class.stock_symbol.in_(symbols))
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("get prices", e) from e
        return {symbol: price for symbol, price in rows}

    def upsert(
        self, stock_symbol: str, price: Decimal, updated_at: datetime
    ) -> PriceEntry:
        values = {
            "stock_symbol": stock_symbol,
            "price": price,
            "updated_at": ensure_utc(updated_at),
        }
        try:
            self._upsert("stock_symbol", values, ("price", "updated_at"))
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("upsert price", e) from e
        return PriceEntry(**values)
