"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable

from adapters.models import Account, Depth, Order, Ticker
from core.types import CurrencyPair


@runtime_checkable
class IExchangeRestClient(Protocol):
    """거래소 REST API 클라이언트 인터페이스

    모든 메서드는 HTTP 왕복 1회에 대응.
    실패는 예외로 전달 (재시도 없음).
    """

    def get_exchange_name(self) -> str:
        """거래소 이름 (예: binance.com)"""
        ...

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def get_ticker(self, pair: CurrencyPair) -> Ticker:
        """24시간 시세 조회"""
        ...

    async def get_depth(self, size: int, pair: CurrencyPair) -> Depth:
        """호가 조회

        Args:
            size: 호가 단계 수 (구현체가 허용 범위로 제한)
            pair: 거래쌍
        """
        ...

    # -------------------------------------------------------------------------
    # 계좌 조회
    # -------------------------------------------------------------------------

    async def get_account(self) -> Account:
        """계좌 잔고 조회"""
        ...

    # -------------------------------------------------------------------------
    # 주문 실행
    # -------------------------------------------------------------------------

    async def limit_buy(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        """지정가 매수"""
        ...

    async def limit_sell(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        """지정가 매도"""
        ...

    async def market_buy(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        """시장가 매수 (price는 무시)"""
        ...

    async def market_sell(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        """시장가 매도 (price는 무시)"""
        ...

    async def cancel_order(self, order_id: str | int, pair: CurrencyPair) -> bool:
        """주문 취소

        Returns:
            취소 성공 시 True (실패는 예외)
        """
        ...

    async def get_one_order(self, order_id: str | int, pair: CurrencyPair) -> Order:
        """특정 주문 조회"""
        ...

    async def get_unfinished_orders(self, pair: CurrencyPair) -> list[Order]:
        """미체결 주문 목록 조회"""
        ...
