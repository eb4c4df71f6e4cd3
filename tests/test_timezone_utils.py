from datetime import date, datetime, timezone

from stockyapi.utils.timezone_utils import ensure_utc, local_date, today_in


def test_local_date_uses_business_timezone():
    # 20:00 UTC는 인도 시간으로 다음날 01:30
    late_utc = datetime(2026, 10, 18, 20, 0, tzinfo=timezone.utc)

    assert local_date(late_utc, "Asia/Kolkata") == date(2026, 10, 19)
    assert local_date(late_utc, "UTC") == date(2026, 10, 18)


def test_ensure_utc_treats_naive_as_utc():
    naive = datetime(2026, 10, 19, 4, 30)

    assert ensure_utc(naive) == datetime(2026, 10, 19, 4, 30, tzinfo=timezone.utc)


def test_today_in_uses_clock():
    clock = lambda: datetime(2026, 10, 19, 19, 0, tzinfo=timezone.utc)  # noqa: E731

    assert today_in("Asia/Kolkata", clock) == date(2026, 10, 20)


def test_local_date_follows_dst_offset():
    # 뉴욕 서머타임 종료 직후(EST, UTC-5) 04:30 UTC는 전날 23:30
    after_dst = datetime(2026, 11, 2, 4, 30, tzinfo=timezone.utc)
    # 서머타임 중(EDT, UTC-4) 04:30 UTC는 당일 00:30
    during_dst = datetime(2026, 10, 19, 4, 30, tzinfo=timezone.utc)

    assert local_date(after_dst, "America/New_York") == date(2026, 11, 1)
    assert local_date(during_dst, "America/New_York") == date(2026, 10, 19)
