"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass, field
from enum import Enum


class TradingMode(str, Enum):
    """거래 모드 (실거래 / 테스트넷)"""

    PRODUCTION = "production"
    TESTNET = "testnet"


class TradeSide(str, Enum):
    """주문 방향"""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_exchange(cls, value: str) -> "TradeSide":
        """거래소 문자열 -> TradeSide (BUY 외에는 SELL)"""
        return cls.BUY if value == cls.BUY.value else cls.SELL


class OrderType(str, Enum):
    """주문 유형"""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


class OrderState(str, Enum):
    """주문 상태

    부분 체결 상태는 모델링하지 않음 (FILLED 외에는 모두 미완료).
    """

    UNFINISHED = "UNFINISHED"
    FINISHED = "FINISHED"


class TimeInForce(str, Enum):
    """주문 유효 기간"""

    GTC = "GTC"  # Good Till Cancel


@dataclass(frozen=True)
class Currency:
    """통화 (불변)

    symbol 기준으로만 비교/해시 (desc는 표시용)
    """

    symbol: str
    desc: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", self.symbol.upper())

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class CurrencyPair:
    """거래쌍 (불변)

    예: CurrencyPair(Currency("BTC"), Currency("USDT")) -> "BTCUSDT"
    """

    base: Currency
    quote: Currency

    def to_symbol(self, sep: str = "") -> str:
        """거래소 심볼 문자열로 변환"""
        return f"{self.base.symbol}{sep}{self.quote.symbol}"

    @classmethod
    def parse(cls, value: str) -> "CurrencyPair":
        """"BTC_USDT", "BTC-USDT", "BTC/USDT" 형식 파싱"""
        for sep in ("_", "-", "/"):
            if sep in value:
                base, quote = value.split(sep, 1)
                if base and quote:
                    return cls(Currency(base), Currency(quote))
        raise ValueError(f"Invalid currency pair: {value!r}")

    def __str__(self) -> str:
        return self.to_symbol("_")
