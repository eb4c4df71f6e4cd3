from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PriceEntry(BaseModel):
    """가격 캐시 항목"""

    model_config = ConfigDict(from_attributes=True)

    stock_symbol: str
    price: Decimal
    updated_at: datetime


class PriceRefreshResult(BaseModel):
    """가격 갱신 1회 실행 결과"""

    started_at: datetime = Field(..., description="갱신 시작 시각 (UTC)")
    updated: List[str] = Field(default_factory=list, description="갱신 성공 종목")
    failed: List[str] = Field(default_factory=list, description="갱신 실패 종목")

    @property
    def total(self) -> int:
        return len(self.updated) + len(self.failed)
