"""
어댑터 공통 데이터 모델

거래소 API 응답을 표준화한 결과 레코드.
거래소가 문자열/숫자를 섞어서 주기 때문에 금액/수량은 파싱 후 float로 보관.
"""

from dataclasses import dataclass, field

from core.types import Currency, CurrencyPair, OrderState, OrderType, TradeSide


@dataclass(frozen=True)
class Ticker:
    """24시간 시세 스냅샷

    Attributes:
        last: 최근 체결가
        buy: 최우선 매수 호가 (bid)
        sell: 최우선 매도 호가 (ask)
        low: 24시간 저가
        high: 24시간 고가
        vol: 24시간 거래량
        date: 기준 시각 (closeTime, 밀리초)
    """

    last: float
    buy: float
    sell: float
    low: float
    high: float
    vol: float
    date: int

    @property
    def spread(self) -> float:
        """매도/매수 호가 차이"""
        return self.sell - self.buy


@dataclass(frozen=True)
class DepthRecord:
    """호가 한 단계 (가격, 수량)"""

    price: float
    amount: float


@dataclass(frozen=True)
class Depth:
    """호가창

    bid_list / ask_list 순서는 거래소가 준 순서 그대로 유지 (재정렬하지 않음).
    """

    pair: CurrencyPair
    bid_list: tuple[DepthRecord, ...] = ()
    ask_list: tuple[DepthRecord, ...] = ()

    @property
    def best_bid(self) -> DepthRecord | None:
        return self.bid_list[0] if self.bid_list else None

    @property
    def best_ask(self) -> DepthRecord | None:
        return self.ask_list[0] if self.ask_list else None


@dataclass(frozen=True)
class Order:
    """주문 정보

    로컬 상태 전이는 없음. 거래소에서 다시 조회해야만 갱신됨.

    Attributes:
        order_id: 거래소 주문 ID
        currency: 거래쌍
        side: 주문 방향
        price: 주문 가격
        amount: 주문 수량
        deal_amount: 체결 수량
        avg_price: 평균 체결가
        status: 주문 상태 (UNFINISHED / FINISHED)
        order_time: 주문 시각
        order_type: 주문 유형
    """

    order_id: int
    currency: CurrencyPair
    side: TradeSide
    price: float = 0.0
    amount: float = 0.0
    deal_amount: float = 0.0
    avg_price: float = 0.0
    status: OrderState = OrderState.UNFINISHED
    order_time: int = 0
    order_type: OrderType = OrderType.LIMIT

    @property
    def is_finished(self) -> bool:
        """완전 체결 여부"""
        return self.status == OrderState.FINISHED

    @property
    def remaining_amount(self) -> float:
        """잔여 수량"""
        return self.amount - self.deal_amount


@dataclass(frozen=True)
class SubAccount:
    """통화별 잔고

    Attributes:
        currency: 통화
        amount: 사용 가능 수량 (free)
        frozen_amount: 주문 등에 묶인 수량 (locked)
    """

    currency: Currency
    amount: float
    frozen_amount: float

    @property
    def total(self) -> float:
        return self.amount + self.frozen_amount


@dataclass
class Account:
    """계좌 정보

    조회할 때마다 통째로 새로 만들어지며 부분 갱신하지 않음.
    """

    exchange: str
    sub_accounts: dict[Currency, SubAccount] = field(default_factory=dict)

    def get(self, currency: Currency | str) -> SubAccount | None:
        """통화별 잔고 조회 (Currency 또는 심볼 문자열)"""
        if isinstance(currency, str):
            currency = Currency(currency)
        return self.sub_accounts.get(currency)
