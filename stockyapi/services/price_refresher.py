"""
가격 갱신 백그라운드 작업

원장에 등장한 모든 종목에 대해 주기적으로 모의 가격을 생성해 가격 캐시에
기록합니다. 시작 즉시 1회 실행하고 이후 PRICE_REFRESH_INTERVAL_SECONDS 마다
반복하며, stop()으로 다음 대기 구간에서 종료됩니다.

종목별 실패는 로그만 남기고 나머지 종목과 루프는 계속 진행합니다.
"""

from __future__ import annotations

import asyncio
import logging
import random
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stockyapi.config import Settings
from stockyapi.core.exceptions import StorageError
from stockyapi.database.session import session_scope
from stockyapi.repositories.price_repository import PriceRepository
from stockyapi.repositories.reward_repository import RewardRepository
from stockyapi.schemas.price import PriceRefreshResult
from stockyapi.utils.timezone_utils import Clock, utc_now

logger = logging.getLogger(__name__)

PRICE_QUANTUM = Decimal("0.01")


class PriceRefresher:
    """가격 캐시 갱신 루프 (asyncio task)"""

    def __init__(
        self,
        session_factory: sessionmaker,
        settings: Settings,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self.interval = float(settings.PRICE_REFRESH_INTERVAL_SECONDS)
        self.rng = rng or random.Random()
        self.clock = clock or utc_now

        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def mock_price(self) -> Decimal:
        """[MOCK_PRICE_MIN, MOCK_PRICE_MAX) 균등분포 모의 가격"""
        low = self.settings.MOCK_PRICE_MIN
        span = self.settings.MOCK_PRICE_MAX - low
        raw = Decimal(str(low + self.rng.random() * span))
        # 내림 처리해야 상한값에 도달하지 않음
        return raw.quantize(PRICE_QUANTUM, rounding=ROUND_DOWN)

    def refresh_once(self) -> PriceRefreshResult:
        """한 번의 갱신 주기를 실행합니다 (blocking)."""
        result = PriceRefreshResult(started_at=self.clock())

        try:
            with session_scope(self.session_factory) as db:
                symbols = RewardRepository(db).list_symbols()
        except (StorageError, SQLAlchemyError) as e:
            logger.error(f"Error retrieving stock symbols: {e!r}")
            return result

        for symbol in sorted(symbols):
            price = self.mock_price()
            try:
                with session_scope(self.session_factory) as db:
                    PriceRepository(db).upsert(symbol, price, self.clock())
            except (StorageError, SQLAlchemyError) as e:
                logger.error(f"Error updating price for {symbol}: {e!r}")
                result.failed.append(symbol)
                continue
            logger.info(f"Stock {symbol} price updated to {price:.2f}")
            result.updated.append(symbol)

        logger.info(
            f"Price refresh finished: {len(result.updated)} updated, {len(result.failed)} failed"
        )
        return result

    async def _run(self) -> None:
        assert self._stop_event is not None
        loop = asyncio.get_running_loop()
        while not self._stop_event.is_set():
            try:
                await loop.run_in_executor(None, self.refresh_once)
            except Exception:
                # 예상 못한 오류도 루프를 멈추지 않음
                logger.exception("Price refresh cycle failed")

            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue

    async def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="price-refresher")
        logger.info(f"Price refresher started (interval={self.interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        assert self._stop_event is not None
        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            self._stop_event = None
        logger.info("Price refresher stopped")
