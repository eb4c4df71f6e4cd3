import logging
from typing import Optional

from sqlalchemy.orm import Session

from stockyapi.config import Settings
from stockyapi.core.exceptions import ConflictError
from stockyapi.repositories.reward_repository import RewardRepository
from stockyapi.schemas.rewards import (
    RewardCreateRequest,
    RewardCreateResponse,
    RewardEvent,
)
from stockyapi.utils.timezone_utils import Clock, local_date, utc_now

logger = logging.getLogger(__name__)


class RewardService:
    """리워드 지급 기록 서비스"""

    def __init__(self, db: Session, settings: Settings, clock: Optional[Clock] = None):
        self.db = db
        self.settings = settings
        self.clock = clock or utc_now
        self.repo = RewardRepository(db)

    def record_reward(self, request: RewardCreateRequest) -> RewardEvent:
        """
        리워드 이벤트를 기록합니다.

        지급 시각은 서버 시각(UTC)이며, 지급일은 영업 타임존 기준으로 계산합니다.

        Raises:
            ConflictError: 같은 사용자/종목/영업일 리워드가 이미 있는 경우
            StorageError: 그 외 저장 실패
        """
        reward_time = self.clock()
        reward_date = local_date(reward_time, self.settings.TIMEZONE)
        try:
            event = self.repo.record_reward(
                user_id=request.user_id,
                stock_symbol=request.stock_symbol,
                shares=request.shares,
                reward_time=reward_time,
                reward_date=reward_date,
            )
        except ConflictError:
            logger.warning(
                f"Duplicate reward for user {request.user_id}, stock {request.stock_symbol}"
            )
            raise

        logger.info(
            f"Reward added: id={event.id} user={event.user_id} "
            f"stock={event.stock_symbol} shares={event.shares}"
        )
        return event

    def create_reward(self, request: RewardCreateRequest) -> RewardCreateResponse:
        event = self.record_reward(request)
        return RewardCreateResponse(
            message="Reward recorded successfully",
            reward_id=event.id,
            reward_time=event.reward_time,
        )
