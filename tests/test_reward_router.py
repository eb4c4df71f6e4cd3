from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from stockyapi.repositories.adjustment_repository import AdjustmentRepository
from stockyapi.repositories.price_repository import PriceRepository


@pytest.fixture
def post_reward(client):
    def _post(user_id="U1", stock_symbol="AAA", shares=10):
        return client.post(
            "/reward",
            json={"user_id": user_id, "stock_symbol": stock_symbol, "shares": shares},
        )

    return _post


class TestRewardRoutes:
    """리워드 라우터 테스트"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_add_reward_success(self, post_reward):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)

        response = post_reward()

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Reward recorded successfully"
        assert isinstance(data["reward_id"], int)
        reward_time = datetime.fromisoformat(data["reward_time"].replace("Z", "+00:00"))
        assert reward_time >= before

    def test_duplicate_reward_returns_409(self, post_reward):
        first = post_reward()
        second = post_reward(shares=3)

        assert first.status_code == 200
        assert second.status_code == 409
        body = second.json()
        assert body["success"] is False
        assert body["error"]["code"] == "CONFLICT_001"

    @pytest.mark.parametrize(
        "payload",
        [
            {"stock_symbol": "AAA", "shares": 1},
            {"user_id": "U1", "shares": 1},
            {"user_id": "U1", "stock_symbol": "AAA"},
            {"user_id": "", "stock_symbol": "AAA", "shares": 1},
            {"user_id": "U1", "stock_symbol": "AAA", "shares": "lots"},
        ],
    )
    def test_invalid_reward_payload_returns_400(self, client, payload):
        response = client.post("/reward", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_001"

    def test_storage_failure_returns_500(self, client, database):
        with database.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE rewards")

        response = client.post(
            "/reward", json={"user_id": "U1", "stock_symbol": "AAA", "shares": 1}
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "STORAGE_001"


class TestValuationRoutes:
    """평가 조회 라우터 테스트"""

    def test_stats_applies_split_multiplier(self, client, post_reward, db, today):
        AdjustmentRepository(db).upsert(
            "AAA", Decimal("2.0"), today - timedelta(days=1), False
        )
        post_reward("U1", "AAA", 10)

        response = client.get("/stats/U1")

        assert response.status_code == 200
        assert response.json() == {
            "user_id": "U1",
            "today_rewards": [{"stock_symbol": "AAA", "total_shares": 20.0}],
            "portfolio_inr_value": 26000.0,
        }

    def test_shares_keep_full_precision_until_valuation(self, client, post_reward, db, today):
        AdjustmentRepository(db).upsert(
            "AAA", Decimal("2"), today - timedelta(days=1), False
        )
        post_reward("U1", "AAA", "0.1234565")

        stats = client.get("/stats/U1").json()
        rewards = client.get("/today-stocks/U1").json()["rewards_today"]

        # 0.1234565 * 2 = 0.246913 (저장 시 6자리로 잘리면 0.246912)
        assert stats["today_rewards"] == [{"stock_symbol": "AAA", "total_shares": 0.246913}]
        assert rewards[0]["shares"] == 0.246913

    def test_portfolio_price_has_two_places(self, client, add_reward, db, today):
        add_reward("U1", "AAA", 3, today - timedelta(days=1))
        PriceRepository(db).upsert("AAA", Decimal("1234.5678"), datetime.now(timezone.utc))

        holding = client.get("/portfolio/U1").json()["portfolio"][0]

        assert holding["current_price"] == 1234.57
        assert holding["total_value_inr"] == 3703.71

    def test_portfolio_defaults_missing_price(self, client, post_reward, add_reward, db, today):
        post_reward("U1", "BB", 2)
        add_reward("U1", "AAA", "1.5", today - timedelta(days=2))
        PriceRepository(db).upsert("AAA", Decimal("2000"), datetime.now(timezone.utc))

        response = client.get("/portfolio/U1")

        assert response.status_code == 200
        assert response.json() == {
            "user_id": "U1",
            "portfolio": [
                {
                    "stock_symbol": "AAA",
                    "total_shares": 1.5,
                    "current_price": 2000.0,
                    "total_value_inr": 3000.0,
                },
                {
                    "stock_symbol": "BB",
                    "total_shares": 2.0,
                    "current_price": 1000.0,
                    "total_value_inr": 2000.0,
                },
            ],
            "portfolio_total_inr": 5000.0,
        }

    def test_historical_inr_excludes_today(self, client, post_reward, add_reward, today):
        post_reward("U1", "AAA", 1)
        add_reward("U1", "AAA", 2, today - timedelta(days=1))
        add_reward("U1", "BB", 3, today - timedelta(days=4))

        response = client.get("/historical-inr/U1")

        assert response.status_code == 200
        assert response.json() == {
            "user_id": "U1",
            "historical_inr": [
                {"date": (today - timedelta(days=4)).isoformat(), "total_inr": 3000.0},
                {"date": (today - timedelta(days=1)).isoformat(), "total_inr": 2000.0},
            ],
        }

    def test_today_stocks_lists_adjusted_rewards(self, client, post_reward, add_reward, db, today):
        AdjustmentRepository(db).upsert("AAA", Decimal("3"), today, False)
        first = post_reward("U1", "AAA", "0.5").json()
        second = post_reward("U1", "BB", 4).json()
        add_reward("U1", "CC", 1, today - timedelta(days=1))

        response = client.get("/today-stocks/U1")

        assert response.status_code == 200
        rewards = response.json()["rewards_today"]
        assert [(r["reward_id"], r["stock_symbol"], r["shares"]) for r in rewards] == [
            (first["reward_id"], "AAA", 1.5),
            (second["reward_id"], "BB", 4.0),
        ]

    def test_delisted_symbol_hidden_from_every_view(
        self, client, post_reward, add_reward, db, today
    ):
        post_reward("U1", "DEAD", 5)
        add_reward("U1", "DEAD", 5, today - timedelta(days=1))
        AdjustmentRepository(db).upsert("DEAD", Decimal("1"), today, True)

        assert client.get("/stats/U1").json()["today_rewards"] == []
        assert client.get("/portfolio/U1").json()["portfolio"] == []
        assert client.get("/historical-inr/U1").json()["historical_inr"] == []
        assert client.get("/today-stocks/U1").json()["rewards_today"] == []

    def test_unknown_user_gets_empty_views(self, client):
        assert client.get("/stats/nobody").json() == {
            "user_id": "nobody",
            "today_rewards": [],
            "portfolio_inr_value": 0.0,
        }
        assert client.get("/portfolio/nobody").json()["portfolio_total_inr"] == 0.0
