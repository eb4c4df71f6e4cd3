from fastapi import Depends, Request
from sqlalchemy.orm import Session

from stockyapi.config import Settings
from stockyapi.database.session import get_db

# Services
from stockyapi.services.reward_service import RewardService
from stockyapi.services.adjustment_service import AdjustmentService
from stockyapi.services.valuation_service import ValuationService


def get_app_settings(request: Request) -> Settings:
    return request.app.container.config()


def get_reward_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> RewardService:
    return RewardService(db=db, settings=settings)


def get_adjustment_service(db: Session = Depends(get_db)) -> AdjustmentService:
    return AdjustmentService(db=db)


def get_valuation_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)
) -> ValuationService:
    return ValuationService(db=db, settings=settings)
