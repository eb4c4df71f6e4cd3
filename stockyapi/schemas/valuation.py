from datetime import date as date_type, datetime
from typing import List

from pydantic import BaseModel, Field


class StockStat(BaseModel):
    """금일 종목별 지급 합계"""

    stock_symbol: str = Field(..., description="종목 심볼")
    total_shares: float = Field(..., description="조정 반영 주식 수 (소수 6자리)")


class TodayStatsResponse(BaseModel):
    user_id: str
    today_rewards: List[StockStat] = Field(default_factory=list)
    portfolio_inr_value: float = Field(..., description="명목가 기준 평가액 (INR)")


class Holding(BaseModel):
    """보유 종목 평가"""

    stock_symbol: str
    total_shares: float
    current_price: float
    total_value_inr: float


class PortfolioResponse(BaseModel):
    user_id: str
    portfolio: List[Holding] = Field(default_factory=list)
    portfolio_total_inr: float


class HistoricalPoint(BaseModel):
    date: date_type
    total_inr: float


class HistoricalINRResponse(BaseModel):
    user_id: str
    historical_inr: List[HistoricalPoint] = Field(default_factory=list)


class TodayReward(BaseModel):
    reward_id: int
    stock_symbol: str
    shares: float
    reward_time: datetime


class TodayStocksResponse(BaseModel):
    user_id: str
    rewards_today: List[TodayReward] = Field(default_factory=list)
