from fastapi import APIRouter, Depends

from stockyapi.deps import get_adjustment_service
from stockyapi.schemas.adjustments import (
    StockAdjustmentListResponse,
    StockAdjustmentRequest,
    StockAdjustmentResponse,
)
from stockyapi.services.adjustment_service import AdjustmentService

router = APIRouter(tags=["stock-adjustments"])


@router.post("/stock-adjustment", response_model=StockAdjustmentResponse)
def add_or_update_stock_adjustment(
    request: StockAdjustmentRequest,
    adjustment_service: AdjustmentService = Depends(get_adjustment_service),
) -> StockAdjustmentResponse:
    """종목 조정 등록/갱신 (종목당 1건, 기존 값 덮어쓰기)"""
    return adjustment_service.record_adjustment(request)


@router.get("/stock-adjustments", response_model=StockAdjustmentListResponse)
def get_all_stock_adjustments(
    adjustment_service: AdjustmentService = Depends(get_adjustment_service),
) -> StockAdjustmentListResponse:
    return adjustment_service.list_adjustments()
