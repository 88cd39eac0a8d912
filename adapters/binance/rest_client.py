"""
Binance Spot REST API 클라이언트

HMAC-SHA256 서명, 응답 정규화.
IExchangeRestClient Protocol 준수.

재시도/Rate Limit/캐시 없음. 요청 1회 = HTTP 왕복 1회.
타임아웃과 취소는 주입된 httpx.AsyncClient가 담당.
"""

import logging
import time
from typing import Any
from urllib.parse import urlencode

import httpx

from adapters.binance import signer
from adapters.binance.errors import (
    BinanceError,
    ExchangeError,
    ParseError,
    TransportError,
)
from adapters.binance.models import (
    decode_json,
    is_error_response,
    parse_account,
    parse_cancel,
    parse_depth,
    parse_open_orders,
    parse_order,
    parse_order_id,
    parse_ticker,
    to_int,
)
from adapters.models import Account, Depth, Order, Ticker
from core.config.loader import ExchangeConfig, get_settings
from core.constants import (
    EXCHANGE_NAME,
    BinanceEndpoints,
    Defaults,
    DepthLimits,
    SigningDefaults,
)
from core.types import CurrencyPair, OrderState, OrderType, TimeInForce, TradeSide

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def clamp_depth_size(size: int) -> int:
    """호가 조회 개수를 [0, 100] 범위로 제한"""
    if size > DepthLimits.MAX:
        return DepthLimits.MAX
    if size < DepthLimits.MIN:
        return DepthLimits.MIN
    return size


class BinanceRestClient:
    """Binance Spot REST API 클라이언트

    IExchangeRestClient Protocol 구현.
    자격 증명과 HTTP 클라이언트 외에는 호출 간 공유 상태가 없음.

    Args:
        api_key: API 키 (X-MBX-APIKEY 헤더)
        api_secret: API 시크릿 (서명용)
        http_client: 주입할 httpx.AsyncClient (None이면 내부에서 생성/소유)
        base_url: REST API 베이스 URL
        recv_window: 서명 요청의 recvWindow (밀리초)
        timeout: 내부 생성 클라이언트의 요청 타임아웃 (초)
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = BinanceEndpoints.PROD_REST_URL,
        recv_window: int = SigningDefaults.RECV_WINDOW,
        timeout: float = Defaults.HTTP_TIMEOUT_SEC,
    ):
        self._api_key = api_key
        self._api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.recv_window = recv_window
        self.timeout = timeout

        self._client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_config(
        cls,
        config: ExchangeConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> "BinanceRestClient":
        """ExchangeConfig로 클라이언트 생성"""
        return cls(
            api_key=config.api_key,
            api_secret=config.api_secret,
            http_client=http_client,
            base_url=config.rest_url,
            recv_window=config.recv_window,
            timeout=config.timeout,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or (self._owns_client and self._client.is_closed):
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """직접 생성한 HTTP 클라이언트만 종료 (주입된 클라이언트는 호출자가 관리)"""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def get_exchange_name(self) -> str:
        return EXCHANGE_NAME

    def _sign(self, params: dict[str, Any]) -> dict[str, Any]:
        return signer.sign(self._api_secret, params, recv_window=self.recv_window)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        signed: bool = False,
    ) -> tuple[Any, str]:
        """API 요청 실행

        GET은 쿼리 스트링, POST/DELETE는 form 본문으로 파라미터 전송.
        서명 대상 문자열과 실제 전송 문자열이 같도록 직접 인코딩.

        Args:
            method: HTTP 메서드 (GET, POST, DELETE)
            path: API 경로 (예: /api/v3/order)
            params: 요청 파라미터
            signed: 서명 필요 여부

        Returns:
            (디코딩된 JSON, 원본 본문)

        Raises:
            SigningError: 서명 실패 시
            TransportError: 네트워크 에러 또는 에러 응답이 아닌 HTTP 4xx/5xx
            ParseError: JSON이 아닌 응답
        """
        request_params = dict(params) if params else {}
        headers: dict[str, str] = {}

        if signed:
            request_params = self._sign(request_params)
            headers[SigningDefaults.API_KEY_HEADER] = self._api_key

        url = f"{self.base_url}{path}"
        encoded = urlencode(request_params)
        content: str | None = None

        if method == "GET":
            if encoded:
                url = f"{url}?{encoded}"
        else:
            headers["Content-Type"] = FORM_CONTENT_TYPE
            content = encoded

        client = await self._get_client()

        try:
            response = await client.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                "Request error",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise TransportError(str(e)) from e

        body = response.text

        if response.status_code >= 400:
            try:
                error_data = decode_json(body)
            except ParseError:
                error_data = None

            # 거래소 에러 응답은 호출한 쪽 파서가 ExchangeError로 변환
            if is_error_response(error_data):
                return error_data, body

            logger.error(
                "HTTP error",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise TransportError(body, status_code=response.status_code)

        return decode_json(body), body

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def get_ticker(self, pair: CurrencyPair) -> Ticker:
        """24시간 시세 조회"""
        data, _ = await self._request(
            "GET",
            BinanceEndpoints.TICKER,
            params={"symbol": pair.to_symbol()},
        )
        try:
            return parse_ticker(data)
        except BinanceError as e:
            logger.error("GetTicker error", extra={"symbol": pair.to_symbol(), "error": str(e)})
            raise

    async def get_depth(self, size: int, pair: CurrencyPair) -> Depth:
        """호가 조회

        Args:
            size: 호가 단계 수 ([0, 100]으로 제한)
            pair: 거래쌍
        """
        limit = clamp_depth_size(size)
        data, _ = await self._request(
            "GET",
            BinanceEndpoints.DEPTH,
            params={"symbol": pair.to_symbol(), "limit": limit},
        )
        try:
            return parse_depth(data, pair)
        except BinanceError as e:
            logger.error("GetDepth error", extra={"symbol": pair.to_symbol(), "error": str(e)})
            raise

    # -------------------------------------------------------------------------
    # 계좌 조회
    # -------------------------------------------------------------------------

    async def get_account(self) -> Account:
        """계좌 잔고 조회 (매번 전체 재구성)"""
        data, _ = await self._request("GET", BinanceEndpoints.ACCOUNT, signed=True)
        account = parse_account(data, self.get_exchange_name())
        logger.debug("계좌 조회 완료", extra={"assets": len(account.sub_accounts)})
        return account

    # -------------------------------------------------------------------------
    # 주문 실행
    # -------------------------------------------------------------------------

    async def _place_order(
        self,
        amount: str,
        price: str,
        pair: CurrencyPair,
        order_type: OrderType,
        side: TradeSide,
    ) -> Order:
        """주문 생성

        LIMIT 주문만 price / timeInForce 전송.
        """
        params: dict[str, Any] = {
            "symbol": pair.to_symbol(),
            "side": side.value,
            "type": order_type.value,
            "quantity": str(amount),
        }
        if order_type == OrderType.LIMIT:
            params["price"] = str(price)
            params["timeInForce"] = TimeInForce.GTC.value

        data, body = await self._request(
            "POST",
            BinanceEndpoints.ORDER,
            params=params,
            signed=True,
        )

        try:
            order_id = parse_order_id(data, body)
        except ExchangeError as e:
            logger.error(
                "주문 생성 실패",
                extra={
                    "error_code": e.code,
                    "error_message": e.message,
                    "request": params,
                },
            )
            raise

        order = Order(
            order_id=to_int(order_id, "orderId"),
            currency=pair,
            side=side,
            price=float(price) if order_type == OrderType.LIMIT and price else 0.0,
            amount=float(amount),
            deal_amount=0.0,
            avg_price=0.0,
            status=OrderState.UNFINISHED,
            order_time=int(time.time()),
            order_type=order_type,
        )
        logger.info(
            "주문 생성 완료",
            extra={
                "order_id": order.order_id,
                "symbol": pair.to_symbol(),
                "side": side.value,
                "type": order_type.value,
                "qty": str(amount),
            },
        )
        return order

    async def limit_buy(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        return await self._place_order(amount, price, pair, OrderType.LIMIT, TradeSide.BUY)

    async def limit_sell(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        return await self._place_order(amount, price, pair, OrderType.LIMIT, TradeSide.SELL)

    async def market_buy(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        return await self._place_order(amount, price, pair, OrderType.MARKET, TradeSide.BUY)

    async def market_sell(self, amount: str, price: str, pair: CurrencyPair) -> Order:
        return await self._place_order(amount, price, pair, OrderType.MARKET, TradeSide.SELL)

    async def cancel_order(self, order_id: str | int, pair: CurrencyPair) -> bool:
        """주문 취소

        Raises:
            OrderError: 거래소 에러 응답
            MalformedResponseError: 응답에 orderId 없음
            OrderIdMismatchError: 응답 orderId가 요청과 다름
        """
        order_id = str(order_id)
        data, body = await self._request(
            "DELETE",
            BinanceEndpoints.ORDER,
            params={"symbol": pair.to_symbol(), "orderId": order_id},
            signed=True,
        )

        try:
            parse_cancel(data, order_id, body)
        except ExchangeError as e:
            logger.error(
                "주문 취소 실패",
                extra={
                    "error_code": e.code,
                    "error_message": e.message,
                    "symbol": pair.to_symbol(),
                    "order_id": order_id,
                },
            )
            raise

        logger.info("주문 취소 완료", extra={"order_id": order_id})
        return True

    async def get_one_order(self, order_id: str | int, pair: CurrencyPair) -> Order:
        """특정 주문 조회"""
        order_id = str(order_id)
        data, _ = await self._request(
            "GET",
            BinanceEndpoints.ORDER,
            params={"symbol": pair.to_symbol(), "orderId": order_id},
            signed=True,
        )
        return parse_order(data, pair, order_id=order_id)

    async def get_unfinished_orders(self, pair: CurrencyPair) -> list[Order]:
        """미체결 주문 목록 조회"""
        data, _ = await self._request(
            "GET",
            BinanceEndpoints.OPEN_ORDERS,
            params={"symbol": pair.to_symbol()},
            signed=True,
        )
        return parse_open_orders(data, pair)

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "BinanceRestClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()



def create_client(
    config: ExchangeConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> BinanceRestClient:
    """설정으로 클라이언트 생성

    config가 None이면 secrets.yaml (Settings 싱글턴)의 현재 모드 설정 사용.
    """
    if config is None:
        config = get_settings().exchange_config
    return BinanceRestClient.from_config(config, http_client=http_client)
