from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockyapi.models.stock_adjustment import StockAdjustment as StockAdjustmentModel
from stockyapi.repositories.base import BaseRepository
from stockyapi.schemas.adjustments import StockAdjustment


class AdjustmentRepository(BaseRepository[StockAdjustmentModel, StockAdjustment]):
    """종목 조정 레지스트리 - 종목당 최신 레코드 1건"""

    def __init__(self, db: Session):
        super().__init__(StockAdjustmentModel, StockAdjustment, db)

    def upsert(
        self,
        stock_symbol: str,
        multiplier: Decimal,
        effective_date: date,
        delisted: bool,
    ) -> StockAdjustment:
        """종목 기준 insert-or-replace. 이전 레코드는 남기지 않습니다."""
        values = {
            "stock_symbol": stock_symbol,
            "multiplier": multiplier,
            "effective_date": effective_date,
            "delisted": delisted,
        }
        try:
            self._upsert(
                "stock_symbol", values, ("multiplier", "effective_date", "delisted")
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("upsert adjustment", e) from e
        return StockAdjustment(**values)

    def get(self, stock_symbol: str) -> Optional[StockAdjustment]:
        return self.get_by_field("stock_symbol", stock_symbol)

    def get_many(self, symbols: Iterable[str]) -> Dict[str, StockAdjustment]:
        symbols = set(symbols)
        if not symbols:
            return {}
        try:
            rows = (
                self.db.query(self.model_class)
                .filter(self.model_class.stock_symbol.in_(symbols))
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("get adjustments", e) from e
        return {row.stock_symbol: self._to_schema(row) for row in rows}

    def list_all(self) -> List[StockAdjustment]:
        try:
            rows = (
                self.db.query(self.model_class)
                .order_by(asc(self.model_class.stock_symbol))
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("list adjustments", e) from e
        return self._to_schemas(rows)
