from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class StockAdjustment(BaseModel):
    """종목 조정 레코드 (DB → Service 변환용)"""

    model_config = ConfigDict(from_attributes=True)

    stock_symbol: str
    multiplier: Decimal = Decimal("1.0")
    effective_date: date
    delisted: bool = False


class StockAdjustmentRequest(BaseModel):
    """종목 조정 등록/갱신 요청"""

    stock_symbol: str = Field(..., min_length=1, description="종목 심볼")
    multiplier: Decimal = Field(..., description="액면분할 배수")
    effective_date: date = Field(..., description="적용일 (YYYY-MM-DD)")
    delisted: bool = Field(False, description="상장폐지 여부")


class StockAdjustmentResponse(BaseModel):
    message: str
    stock: str


class StockAdjustmentItem(BaseModel):
    stock_symbol: str
    multiplier: float
    effective_date: date
    delisted: bool


class StockAdjustmentListResponse(BaseModel):
    adjustments: List[StockAdjustmentItem] = Field(default_factory=list)
