"""
Binance 요청 서명

파라미터에 recvWindow, timestamp를 추가한 뒤
URL 인코딩된 문자열에 HMAC-SHA256 서명을 붙인다.
"""

import hashlib
import hmac
import time
from typing import Any, Mapping
from urllib.parse import urlencode

from adapters.binance.errors import SigningError
from core.constants import SigningDefaults


def current_timestamp() -> str:
    """밀리초 타임스탬프 (나노초 시각의 앞 13자리)"""
    return str(time.time_ns())[: SigningDefaults.TIMESTAMP_DIGITS]


def generate_signature(secret_key: str, payload: str) -> str:
    """HMAC-SHA256 서명 생성

    Args:
        secret_key: API 시크릿
        payload: URL 인코딩된 파라미터 문자열

    Returns:
        16진수(소문자) 서명 문자열

    Raises:
        SigningError: 시크릿이 비어 있거나 인코딩할 수 없는 경우
    """
    if not secret_key:
        raise SigningError("secret key is empty")

    try:
        key = secret_key.encode("utf-8")
        message = payload.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SigningError(f"cannot encode signing input: {e}") from e

    return hmac.new(key, message, hashlib.sha256).hexdigest()


def sign(
    secret_key: str,
    params: Mapping[str, Any],
    recv_window: int = SigningDefaults.RECV_WINDOW,
    timestamp: str | None = None,
) -> dict[str, Any]:
    """파라미터 서명

    입력 params는 변경하지 않고 새 dict를 반환.
    키 순서: 원래 파라미터 -> recvWindow -> timestamp -> signature

    Args:
        secret_key: API 시크릿
        params: 요청 파라미터
        recv_window: 수신 허용 시간 (밀리초)
        timestamp: 밀리초 타임스탬프 (None이면 현재 시각)

    Returns:
        서명이 추가된 파라미터

    Raises:
        SigningError: 서명 생성 실패 시
    """
    signed: dict[str, Any] = dict(params)
    signed.pop("signature", None)
    signed["recvWindow"] = str(recv_window)
    signed["timestamp"] = timestamp if timestamp is not None else current_timestamp()

    signed["signature"] = generate_signature(secret_key, urlencode(signed))
    return signed
