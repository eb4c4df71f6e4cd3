# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .reward_repository import RewardRepository
from .adjustment_repository import AdjustmentRepository
from .price_repository import PriceRepository

__all__ = [
    "BaseRepository",
    "RewardRepository",
    "AdjustmentRepository",
    "PriceRepository",
]
