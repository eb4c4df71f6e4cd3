from datetime import date
from decimal import Decimal

import pytest

from stockyapi.repositories.adjustment_repository import AdjustmentRepository
from stockyapi.repositories.price_repository import PriceRepository


@pytest.fixture
def repo(db):
    return AdjustmentRepository(db)


class TestAdjustmentRepository:
    """AdjustmentRepository 테스트"""

    def test_get_missing_returns_none(self, repo):
        assert repo.get("NOPE") is None

    def test_upsert_inserts_then_replaces(self, repo):
        repo.upsert("AAA", Decimal("2"), date(2026, 1, 1), False)
        repo.upsert("AAA", Decimal("0.5"), date(2026, 6, 1), True)

        adjustment = repo.get("AAA")
        assert adjustment.multiplier == Decimal("0.5")
        assert adjustment.effective_date == date(2026, 6, 1)
        assert adjustment.delisted is True
        assert len(repo.list_all()) == 1

    def test_upsert_is_idempotent(self, repo):
        repo.upsert("AAA", Decimal("2"), date(2026, 1, 1), False)
        first = repo.get("AAA")

        repo.upsert("AAA", Decimal("2"), date(2026, 1, 1), False)
        repo.upsert("AAA", Decimal("2"), date(2026, 1, 1), False)

        assert repo.get("AAA") == first

    def test_list_all_ordered_by_symbol(self, repo):
        repo.upsert("ZZZ", Decimal("1"), date(2026, 1, 1), False)
        repo.upsert("AAA", Decimal("1"), date(2026, 1, 1), False)
        repo.upsert("MMM", Decimal("1"), date(2026, 1, 1), True)

        assert [a.stock_symbol for a in repo.list_all()] == ["AAA", "MMM", "ZZZ"]

    def test_get_many_only_returns_known_symbols(self, repo):
        repo.upsert("AAA", Decimal("3"), date(2026, 1, 1), False)

        found = repo.get_many(["AAA", "BB"])

        assert set(found) == {"AAA"}
        assert found["AAA"].multiplier == Decimal("3")
        assert repo.get_many([]) == {}


class TestPriceRepository:
    """PriceRepository 테스트"""

    def test_missing_price_is_none(self, db):
        assert PriceRepository(db).get("BB") is None

    def test_upsert_replaces_price(self, db):
        from datetime import datetime, timezone

        repo = PriceRepository(db)
        repo.upsert("AAA", Decimal("1200.5"), datetime(2026, 10, 19, tzinfo=timezone.utc))
        repo.upsert("AAA", Decimal("999.25"), datetime(2026, 10, 19, 1, tzinfo=timezone.utc))

        assert repo.get("AAA") == Decimal("999.25")
        assert repo.get_many(["AAA", "BB"]) == {"AAA": Decimal("999.25")}
