"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import json
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from adapters.binance.rest_client import BinanceRestClient
from core.types import Currency, CurrencyPair


def _build_response(status_code: int = 200, payload: Any = None, text: str | None = None) -> httpx.Response:
    """httpx.Response 생성 (JSON 또는 원문)"""
    if text is None:
        text = json.dumps(payload)
    return httpx.Response(status_code, text=text)


# -------------------------------------------------------------------------
# 공통 데이터 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def make_response():
    """httpx.Response 생성 함수"""
    return _build_response


@pytest.fixture
def btc_usdt() -> CurrencyPair:
    """BTC/USDT 거래쌍"""
    return CurrencyPair(Currency("BTC"), Currency("USDT"))


# -------------------------------------------------------------------------
# Mock 클라이언트 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def mock_http_client() -> AsyncMock:
    """주입용 HTTP 클라이언트 (request만 사용)"""
    return AsyncMock()


@pytest.fixture
def rest_client(mock_http_client: AsyncMock) -> BinanceRestClient:
    """Mock 전송 계층을 주입한 REST 클라이언트"""
    return BinanceRestClient(
        api_key="test_key",
        api_secret="test_secret",
        http_client=mock_http_client,
        base_url="https://api.binance.com",
    )


# -------------------------------------------------------------------------
# Binance API 응답 샘플
# -------------------------------------------------------------------------

@pytest.fixture
def binance_ticker_response() -> dict:
    """Binance 24hr 티커 응답 샘플"""
    return {
        "symbol": "BTCUSDT",
        "bidPrice": "100.5",
        "askPrice": "101.0",
        "lastPrice": "100.8",
        "lowPrice": "99",
        "highPrice": "102",
        "volume": "10",
        "openTime": 1619913600000,
        "closeTime": 1620000000000,
    }


@pytest.fixture
def binance_depth_response() -> dict:
    """Binance 호가 응답 샘플 (bids 내림차순, asks 오름차순)"""
    return {
        "lastUpdateId": 1027024,
        "bids": [
            ["100.50000000", "2.00000000"],
            ["100.40000000", "5.50000000"],
        ],
        "asks": [
            ["101.00000000", "1.25000000"],
            ["101.10000000", "3.00000000"],
        ],
    }


@pytest.fixture
def binance_account_response() -> dict:
    """Binance 계좌 응답 샘플"""
    return {
        "makerCommission": 15,
        "takerCommission": 15,
        "canTrade": True,
        "updateTime": 123456789,
        "balances": [
            {"asset": "BTC", "free": "0.50000000", "locked": "0.10000000"},
            {"asset": "USDT", "free": "1000.00000000", "locked": "0.00000000"},
        ],
    }


@pytest.fixture
def binance_order_response() -> dict:
    """Binance 주문 조회 응답 샘플"""
    return {
        "symbol": "BTCUSDT",
        "orderId": 456,
        "clientOrderId": "myOrder1",
        "price": "100.00000000",
        "origQty": "2.00000000",
        "executedQty": "2.00000000",
        "cummulativeQuoteQty": "201.00000000",
        "status": "FILLED",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "side": "SELL",
        "time": 1499827319559,
        "updateTime": 1499827319559,
    }


@pytest.fixture
def binance_open_orders_response() -> list:
    """Binance 미체결 주문 목록 응답 샘플"""
    return [
        {
            "symbol": "BTCUSDT",
            "orderId": 1,
            "price": "99.00000000",
            "origQty": "1.00000000",
            "executedQty": "0.25000000",
            "status": "PARTIALLY_FILLED",
            "type": "LIMIT",
            "side": "BUY",
            "time": 1499827319559,
        },
        {
            "symbol": "BTCUSDT",
            "orderId": "2",
            "price": 105,
            "origQty": 3,
            "status": "NEW",
            "type": "LIMIT",
            "side": "SELL",
            "time": "1499827319560",
        },
    ]


@pytest.fixture
def binance_error_response() -> dict:
    """Binance 에러 응답 샘플"""
    return {"code": -1000, "msg": "An unknown error occurred while processing the request."}
