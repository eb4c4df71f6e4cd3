"""
타임존 유틸리티

리워드 지급일과 "오늘" 판정은 영업 타임존(settings.TIMEZONE) 기준으로 처리합니다.
DB에는 항상 UTC로 저장합니다.
"""

from datetime import date, datetime, timezone
from typing import Callable

import pytz

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """현재 UTC 시간을 반환합니다."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 가정하고 UTC로 변환합니다."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_date(dt: datetime, tz_name: str) -> date:
    """datetime을 영업 타임존의 달력 날짜로 변환합니다."""
    return ensure_utc(dt).astimezone(pytz.timezone(tz_name)).date()


def today_in(tz_name: str, clock: Clock = utc_now) -> date:
    """영업 타임존 기준 오늘 날짜를 반환합니다."""
    return local_date(clock(), tz_name)
