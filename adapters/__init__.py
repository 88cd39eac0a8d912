"""
어댑터 레이어

거래소 REST API와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import IExchangeRestClient
from adapters.models import (
    Account,
    Depth,
    DepthRecord,
    Order,
    SubAccount,
    Ticker,
)

__all__ = [
    # Interfaces
    "IExchangeRestClient",
    # Models
    "Account",
    "Depth",
    "DepthRecord",
    "Order",
    "SubAccount",
    "Ticker",
]
