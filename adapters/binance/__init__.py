"""
Binance 어댑터

Binance Spot REST API 연동을 담당.
요청 서명(signer)과 응답 정규화(models) 포함.
"""

from adapters.binance.rest_client import BinanceRestClient, create_client
from adapters.binance.signer import sign
from adapters.binance.errors import (
    BinanceError,
    TransportError,
    ExchangeError,
    OrderError,
    MalformedResponseError,
    OrderIdMismatchError,
    ParseError,
    SigningError,
)
from adapters.binance.models import (
    parse_ticker,
    parse_depth,
    parse_account,
    parse_order,
    parse_open_orders,
)

__all__ = [
    "BinanceRestClient",
    "create_client",
    "sign",
    "BinanceError",
    "TransportError",
    "ExchangeError",
    "OrderError",
    "MalformedResponseError",
    "OrderIdMismatchError",
    "ParseError",
    "SigningError",
    "parse_ticker",
    "parse_depth",
    "parse_account",
    "parse_order",
    "parse_open_orders",
]
