from datetime import datetime, time, timezone
from decimal import Decimal

import pytest
import pytz
from dependency_injector import providers
from fastapi.testclient import TestClient

from stockyapi.config import Settings
from stockyapi.containers import Container
from stockyapi.database.connection import Database
from stockyapi.main import create_app
from stockyapi.models import Reward
from stockyapi.utils.timezone_utils import today_in


@pytest.fixture
def settings(tmp_path):
    """파일 기반 sqlite 설정 (세션마다 별도 커넥션)"""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'stocky.db'}",
        PRICE_REFRESHER_ENABLED=False,
        PRICE_REFRESH_INTERVAL_SECONDS=0.05,
        TIMEZONE="Asia/Kolkata",
    )


@pytest.fixture
def database(settings):
    database = Database(settings)
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def container(settings, database):
    container = Container()
    container.config.override(providers.Object(settings))
    container.database.override(providers.Object(database))
    yield container
    container.reset_override()


@pytest.fixture
def client(container):
    """테스트 클라이언트 픽스처"""
    app = create_app(container)
    return TestClient(app)


@pytest.fixture
def today(settings):
    return today_in(settings.TIMEZONE)


@pytest.fixture
def add_reward(db, settings):
    """원장에 과거 일자 리워드를 직접 기록하는 헬퍼"""

    def _add(user_id, stock_symbol, shares, day, hour=10):
        local = pytz.timezone(settings.TIMEZONE).localize(datetime.combine(day, time(hour, 0)))
        reward = Reward(
            user_id=user_id,
            stock_symbol=stock_symbol,
            shares=Decimal(str(shares)),
            reward_time=local.astimezone(timezone.utc),
            reward_date=day,
        )
        db.add(reward)
        db.commit()
        return reward

    return _add
