"""Tests for the quote API endpoints."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ecorouter.api.endpoints import get_router
from ecorouter.api.main import app
from ecorouter.errors import NetworkError
from tests.helpers import USDC, USDT, FakeSource, failing, make_router


def make_payload(**overrides) -> dict:
    """Quote 1000 USDC -> USDT at 0.5% slippage."""
    payload = {
        "tokenIn": {"address": USDC, "symbol": "USDC", "decimals": 6},
        "tokenOut": {"address": USDT, "symbol": "USDT", "decimals": 6},
        "amount": "1000000000",
        "maximumSlippageBps": 50,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client whose router has two working sources and one failing source."""
    test_router = make_router(
        FakeSource("alpha", 998_000_000),
        FakeSource("beta", 999_500_000),
        failing("gamma", NetworkError("node unreachable")),
    )
    app.dependency_overrides[get_router] = lambda: test_router
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestQuoteEndpoint:
    """Tests for POST /{chain_id}/quote."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_ranked_trades_and_errors(self, client):
        response = client.post("/1/quote", json=make_payload())

        assert response.status_code == 200
        data = response.json()
        assert [t["source"] for t in data["trades"]] == ["beta", "alpha"]
        assert data["trades"][0]["amountOut"] == "999500000"
        assert data["trades"][0]["minimumAmountOut"] == "994502500"
        assert data["trades"][0]["maximumSlippage"] == "0.5%"
        assert data["errors"] == [
            {"source": "gamma", "kind": "network_error", "message": "node unreachable"}
        ]

    def test_exact_output(self, client):
        response = client.post("/1/quote", json=make_payload(direction="exact_output"))

        assert response.status_code == 200
        trade = response.json()["trades"][0]
        assert trade["direction"] == "exact_output"
        assert trade["amountIn"] == "998000000"
        assert trade["maximumAmountIn"] == "1002990000"
        assert trade["minimumAmountOut"] is None

    def test_enabled_sources(self, client):
        response = client.post("/1/quote", json=make_payload(enabledSources=["alpha"]))

        data = response.json()
        assert [t["source"] for t in data["trades"]] == ["alpha"]
        assert data["errors"] == []

    def test_unsupported_chain_is_empty(self, client):
        response = client.post("/100/quote", json=make_payload())

        assert response.status_code == 200
        assert response.json() == {"trades": [], "errors": []}

    def test_zero_amount_rejected(self, client):
        response = client.post("/1/quote", json=make_payload(amount="0"))

        assert response.status_code == 422
        assert "amount" in response.json()["detail"]

    def test_identical_tokens_rejected(self, client):
        payload = make_payload()
        payload["tokenOut"] = payload["tokenIn"]

        response = client.post("/1/quote", json=payload)

        assert response.status_code == 422

    def test_slippage_out_of_range_rejected(self, client):
        response = client.post("/1/quote", json=make_payload(maximumSlippageBps=10_001))
        assert response.status_code == 422

    def test_malformed_address_rejected(self, client):
        payload = make_payload()
        payload["tokenIn"] = {"address": "0x1234", "symbol": "BAD", "decimals": 18}

        response = client.post("/1/quote", json=payload)

        assert response.status_code == 422

    def test_non_positive_timeout_rejected(self, client):
        response = client.post("/1/quote", json=make_payload(timeoutSeconds=0))
        assert response.status_code == 422


class TestQuoteTimeout:
    """Tests for the per-request deadline."""

    def test_request_timeout_applies(self):
        slow_router = make_router(FakeSource("slow", 1, delay=5), timeout_seconds=30)
        app.dependency_overrides[get_router] = lambda: slow_router
        try:
            response = TestClient(app).post("/1/quote", json=make_payload(timeoutSeconds=0.1))
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["errors"] == [
            {"source": "slow", "kind": "timeout", "message": "no quote before the request deadline"}
        ]
