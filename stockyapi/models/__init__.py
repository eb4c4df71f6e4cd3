from .base import Base
from .reward import Reward
from .stock_adjustment import StockAdjustment
from .stock_price import StockPrice

__all__ = ["Base", "Reward", "StockAdjustment", "StockPrice"]
