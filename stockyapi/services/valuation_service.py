"""
리워드 평가 서비스

원장(RewardRepository), 조정 레지스트리(AdjustmentRepository), 가격 캐시
(PriceRepository)를 조합해 네 가지 조회 결과를 계산합니다.

- today_stats: 금일 종목별 합계 + 명목가(notional price) 기준 평가액
- portfolio: 전체 보유 종목 + 캐시 가격 기준 평가액
- historical_inr: 금일 이전 일자별 평가액 (캐시 가격 기준)
- today_rewards: 금일 리워드 이벤트 목록 (조정 반영 주식 수)

가격 정책 두 가지(명목가, 캐시 가격)는 의도적으로 분리되어 있으며 합치지 않습니다.
조정은 effective_date <= 오늘인 경우에만 적용되고, 적용 중인 조정이
상장폐지(delisted)이면 해당 종목은 모든 조회에서 제외됩니다.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from stockyapi.config import Settings
from stockyapi.repositories.adjustment_repository import AdjustmentRepository
from stockyapi.repositories.price_repository import PriceRepository
from stockyapi.repositories.reward_repository import RewardRepository
from stockyapi.schemas.adjustments import StockAdjustment
from stockyapi.schemas.rewards import RewardEvent
from stockyapi.schemas.valuation import (
    HistoricalINRResponse,
    HistoricalPoint,
    Holding,
    PortfolioResponse,
    StockStat,
    TodayReward,
    TodayStatsResponse,
    TodayStocksResponse,
)
from stockyapi.utils.decimal_utils import round_money, round_shares, to_decimal
from stockyapi.utils.timezone_utils import Clock, today_in, utc_now


NOTIONAL_BASE_PRICE = Decimal(1000)
NOTIONAL_PRICE_PER_CHAR = Decimal(100)
UNADJUSTED = Decimal(1)


def applicable_adjustment(
    adjustment: Optional[StockAdjustment], today: date
) -> Optional[StockAdjustment]:
    """적용일이 도래한 조정만 반환 (미래 적용일이면 조정 없음으로 취급)"""
    if adjustment is None or adjustment.effective_date > today:
        return None
    return adjustment


def adjusted_shares(event: RewardEvent, adjustment: Optional[StockAdjustment]) -> Decimal:
    """shares * multiplier. 음수/0도 그대로 유지합니다."""
    multiplier = adjustment.multiplier if adjustment is not None else UNADJUSTED
    return to_decimal(event.shares) * to_decimal(multiplier)


def is_delisted(adjustment: Optional[StockAdjustment]) -> bool:
    return adjustment is not None and adjustment.delisted


def notional_price(stock_symbol: str) -> Decimal:
    """금일 통계 전용 명목가: 1000 + 100 * 심볼 길이"""
    return NOTIONAL_BASE_PRICE + NOTIONAL_PRICE_PER_CHAR * len(stock_symbol)


class ValuationService:
    """조정 반영 리워드 평가 서비스"""

    def __init__(self, db: Session, settings: Settings, clock: Optional[Clock] = None):
        self.db = db
        self.settings = settings
        self.clock = clock or utc_now
        self.reward_repo = RewardRepository(db)
        self.adjustment_repo = AdjustmentRepository(db)
        self.price_repo = PriceRepository(db)

    # ------------------------------------------------------------------
    # policies
    # ------------------------------------------------------------------

    def today(self) -> date:
        return today_in(self.settings.TIMEZONE, self.clock)

    @property
    def default_price(self) -> Decimal:
        return Decimal(self.settings.DEFAULT_PRICE)

    def cached_price(self, stock_symbol: str) -> Decimal:
        """가격 캐시 값, 없으면 기본가(1000)"""
        return self._cached_prices([stock_symbol])[stock_symbol]

    def _cached_prices(self, symbols: Iterable[str]) -> Dict[str, Decimal]:
        """종목별 캐시 가격 (금액이므로 소수점 2자리)"""
        symbols = set(symbols)
        cached = self.price_repo.get_many(symbols)
        return {
            symbol: round_money(cached[symbol]) if symbol in cached else self.default_price
            for symbol in symbols
        }

    def _applicable_adjustments(
        self, symbols: Iterable[str], today: date
    ) -> Dict[str, StockAdjustment]:
        adjustments = self.adjustment_repo.get_many(symbols)
        return {
            symbol: adjustment
            for symbol, adjustment in adjustments.items()
            if applicable_adjustment(adjustment, today) is not None
        }

    def _visible_events(
        self, events: List[RewardEvent], adjustments: Mapping[str, StockAdjustment]
    ) -> List[RewardEvent]:
        return [e for e in events if not is_delisted(adjustments.get(e.stock_symbol))]

    def _total_shares_by_symbol(
        self, events: List[RewardEvent], adjustments: Mapping[str, StockAdjustment]
    ) -> Dict[str, Decimal]:
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        for event in events:
            totals[event.stock_symbol] += adjusted_shares(
                event, adjustments.get(event.stock_symbol)
            )
        return totals

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------

    def today_stats(self, user_id: str) -> TodayStatsResponse:
        today = self.today()
        events = self.reward_repo.events_for_user_on(user_id, today)
        adjustments = self._applicable_adjustments(
            {e.stock_symbol for e in events}, today
        )
        totals = self._total_shares_by_symbol(
            self._visible_events(events, adjustments), adjustments
        )

        stats: List[StockStat] = []
        portfolio_value = Decimal(0)
        for symbol in sorted(totals):
            total_shares = round_shares(totals[symbol])
            portfolio_value += total_shares * notional_price(symbol)
            stats.append(StockStat(stock_symbol=symbol, total_shares=float(total_shares)))

        return TodayStatsResponse(
            user_id=user_id,
            today_rewards=stats,
            portfolio_inr_value=float(round_money(portfolio_value)),
        )

    def portfolio(self, user_id: str) -> PortfolioResponse:
        today = self.today()
        events = self.reward_repo.all_events_for_user(user_id)
        adjustments = self._applicable_adjustments(
            {e.stock_symbol for e in events}, today
        )
        totals = self._total_shares_by_symbol(
            self._visible_events(events, adjustments), adjustments
        )
        prices = self._cached_prices(totals.keys())

        holdings: List[Holding] = []
        grand_total = Decimal(0)
        for symbol in sorted(totals):
            total_shares = round_shares(totals[symbol])
            current_price = prices[symbol]
            value = round_money(total_shares * current_price)
            grand_total += value
            holdings.append(
                Holding(
                    stock_symbol=symbol,
                    total_shares=float(total_shares),
                    current_price=float(current_price),
                    total_value_inr=float(value),
                )
            )

        return PortfolioResponse(
            user_id=user_id,
            portfolio=holdings,
            portfolio_total_inr=float(round_money(grand_total)),
        )

    def historical_inr(self, user_id: str) -> HistoricalINRResponse:
        today = self.today()
        events = self.reward_repo.events_for_user_before(user_id, today)
        adjustments = self._applicable_adjustments(
            {e.stock_symbol for e in events}, today
        )
        visible = self._visible_events(events, adjustments)
        prices = self._cached_prices({e.stock_symbol for e in visible})

        daily: Dict[date, Decimal] = defaultdict(Decimal)
        for event in visible:
            symbol = event.stock_symbol
            daily[event.reward_date] += (
                adjusted_shares(event, adjustments.get(symbol)) * prices[symbol]
            )

        return HistoricalINRResponse(
            user_id=user_id,
            historical_inr=[
                HistoricalPoint(date=day, total_inr=float(round_money(daily[day])))
                for day in sorted(daily)
            ],
        )

    def today_rewards(self, user_id: str) -> TodayStocksResponse:
        today = self.today()
        events = self.reward_repo.events_for_user_on(user_id, today)
        adjustments = self._applicable_adjustments(
            {e.stock_symbol for e in events}, today
        )

        rewards = [
            TodayReward(
                reward_id=event.id,
                stock_symbol=event.stock_symbol,
                shares=float(
                    round_shares(adjusted_shares(event, adjustments.get(event.stock_symbol)))
                ),
                reward_time=event.reward_time,
            )
            for event in sorted(
                self._visible_events(events, adjustments),
                key=lambda e: (e.reward_time, e.id),
            )
        ]
        return TodayStocksResponse(user_id=user_id, rewards_today=rewards)
