import logging

from sqlalchemy.orm import Session

from stockyapi.repositories.adjustment_repository import AdjustmentRepository
from stockyapi.schemas.adjustments import (
    StockAdjustment,
    StockAdjustmentItem,
    StockAdjustmentListResponse,
    StockAdjustmentRequest,
    StockAdjustmentResponse,
)

logger = logging.getLogger(__name__)


class AdjustmentService:
    """종목 조정(액면분할/상장폐지) 관리 서비스"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdjustmentRepository(db)

    def upsert_adjustment(self, request: StockAdjustmentRequest) -> StockAdjustment:
        adjustment = self.repo.upsert(
            stock_symbol=request.stock_symbol,
            multiplier=request.multiplier,
            effective_date=request.effective_date,
            delisted=request.delisted,
        )

        action = "delisted" if adjustment.delisted else "updated"
        logger.info(
            f"{action} stock adjustment for {adjustment.stock_symbol} "
            f"(multiplier {adjustment.multiplier:.2f}, effective {adjustment.effective_date})"
        )
        return adjustment

    def record_adjustment(self, request: StockAdjustmentRequest) -> StockAdjustmentResponse:
        adjustment = self.upsert_adjustment(request)
        return StockAdjustmentResponse(
            message="Stock adjustment recorded successfully",
            stock=adjustment.stock_symbol,
        )

    def list_adjustments(self) -> StockAdjustmentListResponse:
        return StockAdjustmentListResponse(
            adjustments=[
                StockAdjustmentItem(
                    stock_symbol=adj.stock_symbol,
                    multiplier=float(adj.multiplier),
                    effective_date=adj.effective_date,
                    delisted=adj.delisted,
                )
                for adj in self.repo.list_all()
            ]
        )
