"""
Binance API 응답 -> 공통 모델 변환

Binance Spot API 응답을 adapters.models의 결과 레코드로 변환.

같은 엔드포인트가 정상 응답 대신 에러 응답({"code": ..., "msg": ...})을
줄 수 있으므로 모든 파서는 에러 응답 여부를 먼저 확인한 뒤 정상 파싱을 진행.
숫자 필드는 문자열/숫자 어느 쪽으로 와도 to_float / to_int로 동일하게 처리.
"""

import json
import math
from typing import Any, Iterable

from adapters.binance.errors import (
    ExchangeError,
    MalformedResponseError,
    OrderError,
    OrderIdMismatchError,
    ParseError,
)
from adapters.models import Account, Depth, DepthRecord, Order, SubAccount, Ticker
from core.types import Currency, CurrencyPair, OrderState, OrderType, TradeSide


FILLED_STATUS = "FILLED"


# -------------------------------------------------------------------------
# 숫자 변환
# -------------------------------------------------------------------------

def to_float(value: Any, field: str) -> float:
    """문자열 또는 숫자 -> float

    Raises:
        ParseError: 값이 없거나 숫자로 변환할 수 없는 경우
    """
    if value is None:
        raise ParseError(f"missing numeric field: {field}", field=field)
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ParseError(f"non-numeric field {field}: {value!r}", field=field)

    try:
        result = float(value)
    except ValueError as e:
        raise ParseError(f"non-numeric field {field}: {value!r}", field=field) from e

    if not math.isfinite(result):
        raise ParseError(f"non-finite field {field}: {value!r}", field=field)
    return result


def to_int(value: Any, field: str) -> int:
    """문자열 또는 숫자 -> int

    "1620000000000", 1620000000000, 1620000000000.0 모두 허용.

    Raises:
        ParseError: 값이 없거나 정수로 변환할 수 없는 경우
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass

    number = to_float(value, field)
    if not number.is_integer():
        raise ParseError(f"non-integer field {field}: {value!r}", field=field)
    return int(number)


# -------------------------------------------------------------------------
# 에러 응답 판별
# -------------------------------------------------------------------------

def is_error_response(data: Any) -> bool:
    """에러 응답({"code": ..., "msg": ...}) 여부"""
    return isinstance(data, dict) and "code" in data and "msg" in data


def raise_for_error(data: Any, error_cls: type[ExchangeError] = ExchangeError) -> None:
    """에러 응답이면 ExchangeError(또는 error_cls) 발생

    Binance 에러 응답 예시:
    {"code": -1121, "msg": "Invalid symbol."}
    """
    if not is_error_response(data):
        return

    code = data["code"]
    try:
        code = int(code)
    except (TypeError, ValueError):
        code = -1
    raise error_cls(code=code, message=str(data["msg"]))


def decode_json(body: str | bytes) -> Any:
    """응답 본문 JSON 디코딩

    Raises:
        ParseError: JSON이 아닌 경우
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"invalid JSON response: {e}") from e


def _raw(data: Any, raw_body: str | None) -> str:
    if raw_body is not None:
        return raw_body
    return json.dumps(data, ensure_ascii=False)


def _require_dict(data: Any, raw_body: str | None = None) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedResponseError(_raw(data, raw_body))
    return data


def _require_fields(
    data: dict[str, Any],
    fields: Iterable[str],
    raw_body: str | None = None,
) -> None:
    if any(name not in data for name in fields):
        raise MalformedResponseError(_raw(data, raw_body))


# -------------------------------------------------------------------------
# 시세
# -------------------------------------------------------------------------

def parse_ticker(data: Any) -> Ticker:
    """Binance 24hr 티커 응답 -> Ticker

    Binance GET /api/v1/ticker/24hr 응답 예시:
    {
        "symbol": "BTCUSDT",
        "lastPrice": "100.8",
        "bidPrice": "100.5",
        "askPrice": "101.0",
        "lowPrice": "99",
        "highPrice": "102",
        "volume": "10",
        "closeTime": 1620000000000
    }
    """
    raise_for_error(data)
    if not isinstance(data, dict):
        raise ParseError(f"unexpected ticker response: {data!r}")

    return Ticker(
        last=to_float(data.get("lastPrice"), "lastPrice"),
        buy=to_float(data.get("bidPrice"), "bidPrice"),
        sell=to_float(data.get("askPrice"), "askPrice"),
        low=to_float(data.get("lowPrice"), "lowPrice"),
        high=to_float(data.get("highPrice"), "highPrice"),
        vol=to_float(data.get("volume"), "volume"),
        date=to_int(data.get("closeTime"), "closeTime"),
    )


def _parse_levels(levels: Any, side: str) -> tuple[DepthRecord, ...]:
    if not isinstance(levels, list):
        raise ParseError(f"{side} is not a list: {levels!r}", field=side)

    records = []
    for level in levels:
        if not isinstance(level, (list, tuple)) or len(level) < 2:
            raise ParseError(f"invalid {side} level: {level!r}", field=side)
        records.append(
            DepthRecord(
                price=to_float(level[0], f"{side}.price"),
                amount=to_float(level[1], f"{side}.amount"),
            )
        )
    return tuple(records)


def parse_depth(data: Any, pair: CurrencyPair) -> Depth:
    """Binance 호가 응답 -> Depth

    Binance GET /api/v1/depth 응답 예시:
    {
        "lastUpdateId": 1027024,
        "bids": [["4.00000000", "431.00000000"]],
        "asks": [["4.00000200", "12.00000000"]]
    }
    """
    raise_for_error(data)
    data = _require_dict(data)
    _require_fields(data, ("bids", "asks"))

    return Depth(
        pair=pair,
        bid_list=_parse_levels(data["bids"], "bids"),
        ask_list=_parse_levels(data["asks"], "asks"),
    )


# -------------------------------------------------------------------------
# 주문
# -------------------------------------------------------------------------

def _order_id_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def parse_order_id(data: Any, raw_body: str | None = None) -> str:
    """주문 생성 응답에서 orderId 추출

    에러 응답이면 OrderError(code, msg),
    그 외에 orderId가 없으면 원본 본문을 담은 MalformedResponseError.
    """
    raise_for_error(data, OrderError)
    data = _require_dict(data, raw_body)

    order_id = _order_id_str(data.get("orderId"))
    if order_id is None:
        raise MalformedResponseError(_raw(data, raw_body))
    return order_id


def parse_cancel(data: Any, order_id: str, raw_body: str | None = None) -> bool:
    """주문 취소 응답 검증

    Raises:
        OrderError: 에러 응답
        MalformedResponseError: orderId 없음
        OrderIdMismatchError: 요청한 orderId와 다름
    """
    raise_for_error(data, OrderError)
    data = _require_dict(data, raw_body)

    canceled_id = _order_id_str(data.get("orderId"))
    if canceled_id is None:
        raise MalformedResponseError(_raw(data, raw_body))
    if canceled_id != str(order_id):
        raise OrderIdMismatchError(requested=str(order_id), returned=canceled_id)
    return True


def _order_type(value: Any) -> OrderType:
    try:
        return OrderType(value)
    except ValueError:
        return OrderType.LIMIT


def parse_order(data: Any, pair: CurrencyPair, order_id: str | None = None) -> Order:
    """Binance 주문 조회 응답 -> Order

    Binance GET /api/v3/order 응답 예시:
    {
        "symbol": "LTCBTC",
        "orderId": 1,
        "price": "0.1",
        "origQty": "1.0",
        "executedQty": "0.0",
        "cummulativeQuoteQty": "0.0",
        "status": "NEW",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "side": "BUY",
        "time": 1499827319559
    }

    status가 FILLED면 FINISHED, 그 외는 모두 UNFINISHED.
    """
    raise_for_error(data)
    data = _require_dict(data)
    _require_fields(data, ("status", "origQty", "price"))

    if order_id is None:
        _require_fields(data, ("orderId",))
        order_id = data["orderId"]

    status = OrderState.FINISHED if data["status"] == FILLED_STATUS else OrderState.UNFINISHED

    deal_amount = 0.0
    if "executedQty" in data:
        deal_amount = to_float(data["executedQty"], "executedQty")

    avg_price = 0.0
    if deal_amount > 0 and "cummulativeQuoteQty" in data:
        avg_price = to_float(data["cummulativeQuoteQty"], "cummulativeQuoteQty") / deal_amount

    order_time = 0
    if "time" in data:
        order_time = to_int(data["time"], "time")

    return Order(
        order_id=to_int(order_id, "orderId"),
        currency=pair,
        side=TradeSide.from_exchange(data.get("side", TradeSide.BUY.value)),
        price=to_float(data["price"], "price"),
        amount=to_float(data["origQty"], "origQty"),
        deal_amount=deal_amount,
        avg_price=avg_price,
        status=status,
        order_time=order_time,
        order_type=_order_type(data.get("type")),
    )


def parse_open_orders(data: Any, pair: CurrencyPair) -> list[Order]:
    """Binance 미체결 주문 목록 응답 -> list[Order]

    모든 주문은 UNFINISHED로 표시.
    """
    raise_for_error(data)
    if not isinstance(data, list):
        raise MalformedResponseError(_raw(data, None))

    orders = []
    for item in data:
        item = _require_dict(item)
        _require_fields(item, ("orderId", "price", "origQty", "side"))
        orders.append(
            Order(
                order_id=to_int(item["orderId"], "orderId"),
                currency=pair,
                side=TradeSide.from_exchange(item["side"]),
                price=to_float(item["price"], "price"),
                amount=to_float(item["origQty"], "origQty"),
                deal_amount=to_float(item.get("executedQty", 0), "executedQty"),
                status=OrderState.UNFINISHED,
                order_time=to_int(item.get("time", 0), "time"),
                order_type=_order_type(item.get("type")),
            )
        )
    return orders


# -------------------------------------------------------------------------
# 계좌
# -------------------------------------------------------------------------

def parse_account(data: Any, exchange: str) -> Account:
    """Binance 계좌 응답 -> Account

    Binance GET /api/v3/account 응답 예시:
    {
        "balances": [
            {"asset": "BTC", "free": "4723846.89208129", "locked": "0.00000000"},
            {"asset": "LTC", "free": "4763368.68006011", "locked": "0.00000000"}
        ]
    }

    같은 asset이 여러 번 나오면 마지막 항목이 남음.
    """
    raise_for_error(data)
    data = _require_dict(data)
    _require_fields(data, ("balances",))

    balances = data["balances"]
    if not isinstance(balances, list):
        raise MalformedResponseError(_raw(data, None))

    account = Account(exchange=exchange)
    for item in balances:
        item = _require_dict(item)
        _require_fields(item, ("asset", "free", "locked"))

        currency = Currency(str(item["asset"]))
        account.sub_accounts[currency] = SubAccount(
            currency=currency,
            amount=to_float(item["free"], "free"),
            frozen_amount=to_float(item["locked"], "locked"),
        )
    return account
