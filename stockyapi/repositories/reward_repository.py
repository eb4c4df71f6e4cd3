"""
리워드 원장 리포지토리

리워드 이벤트는 append-only로 기록되며, 같은 사용자/종목/영업일 조합은
uq_rewards_user_symbol_day 제약으로 한 번만 허용됩니다.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Set

from sqlalchemy import asc, distinct
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stockyapi.core.exceptions import ConflictError
from stockyapi.models.reward import Reward as RewardModel
from stockyapi.repositories.base import BaseRepository
from stockyapi.schemas.rewards import RewardEvent
from stockyapi.utils.timezone_utils import ensure_utc


class RewardRepository(BaseRepository[RewardModel, RewardEvent]):
    """
    리워드 원장

    주요 기능:
    1. 리워드 이벤트 기록 (중복 시 ConflictError)
    2. 전체 종목 목록 조회 (가격 갱신용)
    3. 사용자별 당일/전체/특정일 이전 이벤트 조회
    """

    def __init__(self, db: Session):
        super().__init__(RewardModel, RewardEvent, db)

    def _to_event(self, model_instance: RewardModel) -> RewardEvent:
        event = self._to_schema(model_instance)
        # sqlite는 tz 정보를 버리므로 UTC로 복원
        return event.model_copy(update={"reward_time": ensure_utc(event.reward_time)})

    def record_reward(
        self,
        user_id: str,
        stock_symbol: str,
        shares: Decimal,
        reward_time: datetime,
        reward_date: date,
    ) -> RewardEvent:
        instance = self.model_class(
            user_id=user_id,
            stock_symbol=stock_symbol,
            shares=shares,
            reward_time=ensure_utc(reward_time),
            reward_date=reward_date,
        )
        self.db.add(instance)
        try:
            self.db.flush()
            self.db.refresh(instance)
            self.db.commit()
        except IntegrityError as e:
            self._rollback_quietly()
            raise ConflictError(
                message="Duplicate reward event — this reward already exists",
                details={
                    "user_id": user_id,
                    "stock_symbol": stock_symbol,
                    "reward_date": reward_date.isoformat(),
                },
            ) from e
        except SQLAlchemyError as e:
            raise self._storage_error("record reward", e) from e

        return self._to_event(instance)

    def list_symbols(self) -> Set[str]:
        try:
            rows = self.db.query(distinct(self.model_class.stock_symbol)).all()
        except SQLAlchemyError as e:
            raise self._storage_error("list symbols", e) from e
        return {row[0] for row in rows}

    def events_for_user_on(self, user_id: str, day: date) -> List[RewardEvent]:
        """지정 영업일의 이벤트 (지급 시각 오름차순)"""
        try:
            rows = (
                self.db.query(self.model_class)
                .filter(
                    self.model_class.user_id == user_id,
                    self.model_class.reward_date == day,
                )
                .order_by(asc(self.model_class.reward_time), asc(self.model_class.id))
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("events for user on day", e) from e
        return [self._to_event(row) for row in rows]

    def all_events_for_user(self, user_id: str) -> List[RewardEvent]:
        try:
            rows = (
                self.db.query(self.model_class)
                .filter(self.model_class.user_id == user_id)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("all events for user", e) from e
        return [self._to_event(row) for row in rows]

    def events_for_user_before(self, user_id: str, day: date) -> List[RewardEvent]:
        """지정 영업일 이전(당일 제외) 이벤트"""
        try:
            rows = (
                self.db.query(self.model_class)
                .filter(
                    self.model_class.user_id == user_id,
                    self.model_class.reward_date < day,
                )
                .order_by(asc(self.model_class.reward_date))
                .all()
            )
        except SQLAlchemyError as e:
            raise self._storage_error("events for user before day", e) from e
        return [self._to_event(row) for row in rows]
