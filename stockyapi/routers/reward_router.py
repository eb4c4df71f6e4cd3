from fastapi import APIRouter, Depends, Path

from stockyapi.deps import get_reward_service, get_valuation_service
from stockyapi.schemas.rewards import RewardCreateRequest, RewardCreateResponse
from stockyapi.schemas.valuation import (
    HistoricalINRResponse,
    PortfolioResponse,
    TodayStatsResponse,
    TodayStocksResponse,
)
from stockyapi.services.reward_service import RewardService
from stockyapi.services.valuation_service import ValuationService


router = APIRouter(tags=["rewards"])


@router.post("/reward", response_model=RewardCreateResponse)
def add_reward(
    request: RewardCreateRequest,
    reward_service: RewardService = Depends(get_reward_service),
) -> RewardCreateResponse:
    """리워드 지급 기록

    같은 사용자/종목의 당일 리워드가 이미 있으면 409를 반환합니다.
    """
    return reward_service.create_reward(request)


@router.get("/stats/{user_id}", response_model=TodayStatsResponse)
def get_stats(
    user_id: str = Path(..., description="사용자 ID"),
    valuation_service: ValuationService = Depends(get_valuation_service),
) -> TodayStatsResponse:
    """금일 종목별 지급 합계와 명목가 기준 평가액"""
    return valuation_service.today_stats(user_id)


@router.get("/portfolio/{user_id}", response_model=PortfolioResponse)
def get_portfolio(
    user_id: str = Path(..., description="사용자 ID"),
    valuation_service: ValuationService = Depends(get_valuation_service),
) -> PortfolioResponse:
    """전체 보유 종목과 캐시 가격 기준 평가액"""
    return valuation_service.portfolio(user_id)


@router.get("/historical-inr/{user_id}", response_model=HistoricalINRResponse)
def get_historical_inr(
    user_id: str = Path(..., description="사용자 ID"),
    valuation_service: ValuationService = Depends(get_valuation_service),
) -> HistoricalINRResponse:
    """금일 이전 일자별 평가액"""
    return valuation_service.historical_inr(user_id)


@router.get("/today-stocks/{user_id}", response_model=TodayStocksResponse)
def get_today_stocks(
    user_id: str = Path(..., description="사용자 ID"),
    valuation_service: ValuationService = Depends(get_valuation_service),
) -> TodayStocksResponse:
    """금일 리워드 이벤트 목록"""
    return valuation_service.today_rewards(user_id)
