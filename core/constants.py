"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

EXCHANGE_NAME: str = "binance.com"


class BinanceEndpoints:
    """Binance Spot API 엔드포인트 (고정값)

    공식 문서: https://developers.binance.com/docs/binance-spot-api-docs/rest-api
    """

    # Production
    PROD_REST_URL: str = "https://api.binance.com"

    # Testnet (Spot)
    TEST_REST_URL: str = "https://testnet.binance.vision"

    API_V1: str = "/api/v1/"
    API_V3: str = "/api/v3/"

    TICKER: str = API_V1 + "ticker/24hr"
    DEPTH: str = API_V1 + "depth"
    ACCOUNT: str = API_V3 + "account"
    ORDER: str = API_V3 + "order"
    OPEN_ORDERS: str = API_V3 + "openOrders"


class SigningDefaults:
    """서명 관련 기본값"""

    # 요청 타임스탬프 허용 오차 (밀리초)
    RECV_WINDOW: int = 6000000
    # 나노초 타임스탬프에서 잘라낼 자릿수 (밀리초 = 13자리)
    TIMESTAMP_DIGITS: int = 13
    API_KEY_HEADER: str = "X-MBX-APIKEY"


class DepthLimits:
    """호가 조회 개수 범위 (양 끝 포함)"""

    MIN: int = 0
    MAX: int = 100


class Defaults:
    """기본값 상수"""

    HTTP_TIMEOUT_SEC: float = 30.0


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"
