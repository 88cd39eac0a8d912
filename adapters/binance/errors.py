"""
Binance 어댑터 에러 정의

- TransportError: 네트워크/HTTP 실패
- ExchangeError: 거래소 에러 응답(code/msg) 또는 필수 필드 누락/불일치
- ParseError: JSON 디코딩 실패 또는 숫자 변환 실패
- SigningError: 요청 서명 생성 실패
"""


class BinanceError(Exception):
    """Binance 어댑터 에러 최상위 클래스"""

    pass


class TransportError(BinanceError):
    """HTTP 전송 에러

    httpx 예외는 __cause__로 보존.
    status_code는 HTTP 응답을 받은 경우에만 설정.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        if status_code is None:
            super().__init__(f"Transport error: {message}")
        else:
            super().__init__(f"Transport error [HTTP {status_code}]: {message}")


class ExchangeError(BinanceError):
    """Binance API 에러

    API 응답에서 에러 코드를 받았을 때 발생.
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Binance API Error [{code}]: {message}")


class OrderError(ExchangeError):
    """주문 관련 에러

    주문 생성/취소 실패 시 발생.
    """
    pass


class MalformedResponseError(ExchangeError):
    """필수 필드가 없는 응답

    message에는 원본 응답 본문이 그대로 들어감.
    """

    CODE = -1

    def __init__(self, message: str):
        super().__init__(code=self.CODE, message=message)


class OrderIdMismatchError(ExchangeError):
    """취소 응답의 orderId가 요청한 값과 다름"""

    CODE = -2

    def __init__(self, requested: str, returned: str):
        self.requested = requested
        self.returned = returned
        super().__init__(
            code=self.CODE,
            message=f"orderId doesn't match: requested={requested}, returned={returned}",
        )


class ParseError(BinanceError):
    """응답 파싱 에러"""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class SigningError(BinanceError):
    """서명 생성 에러"""

    pass
