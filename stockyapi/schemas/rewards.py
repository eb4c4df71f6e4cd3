from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RewardEvent(BaseModel):
    """원장에 기록된 리워드 이벤트 (DB → Service 변환용)"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    stock_symbol: str
    shares: Decimal
    reward_time: datetime
    reward_date: date


class RewardCreateRequest(BaseModel):
    """리워드 지급 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")
    stock_symbol: str = Field(..., min_length=1, description="종목 심볼")
    shares: Decimal = Field(..., description="지급 주식 수")


class RewardCreateResponse(BaseModel):
    """리워드 지급 응답"""

    message: str = Field(..., description="응답 메시지")
    reward_id: int = Field(..., description="리워드 ID")
    reward_time: datetime = Field(..., description="지급 시각 (UTC)")
