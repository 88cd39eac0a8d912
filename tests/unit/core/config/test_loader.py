"""
core/config/loader.py 테스트

secrets.yaml 로드, 검증, 거래소 설정 생성 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    Secrets,
    ExchangeConfig,
    SecretsLoadError,
    load_secrets,
    get_exchange_config,
    Settings,
    get_settings,
)
from core.constants import BinanceEndpoints, SigningDefaults
from core.types import TradingMode


class TestSecrets:
    """Secrets 데이터클래스 테스트"""

    def test_creation(self) -> None:
        """기본 생성"""
        secrets = Secrets(
            mode=TradingMode.TESTNET,
            api_key="test_key",
            api_secret="test_secret",
        )

        assert secrets.mode == TradingMode.TESTNET
        assert secrets.api_key == "test_key"
        assert secrets.api_secret == "test_secret"
        assert secrets.recv_window == SigningDefaults.RECV_WINDOW

    def test_frozen(self) -> None:
        """불변성 확인"""
        secrets = Secrets(
            mode=TradingMode.TESTNET,
            api_key="key",
            api_secret="secret",
        )

        with pytest.raises(AttributeError):
            secrets.api_key = "new_key"  # type: ignore


class TestExchangeConfig:
    """ExchangeConfig 데이터클래스 테스트"""

    def test_frozen(self) -> None:
        """불변성 확인"""
        config = ExchangeConfig(
            rest_url="url",
            api_key="key",
            api_secret="secret",
        )

        with pytest.raises(AttributeError):
            config.rest_url = "new_url"  # type: ignore


class TestLoadSecrets:
    """load_secrets 함수 테스트"""

    def test_load_testnet(self, temp_secrets_file: Path) -> None:
        """Testnet 모드 로드"""
        secrets = load_secrets(temp_secrets_file)

        assert secrets.mode == TradingMode.TESTNET
        assert secrets.api_key == "test_api_key_abcde"
        assert secrets.api_secret == "test_api_secret_fghij"
        assert secrets.recv_window == SigningDefaults.RECV_WINDOW

    def test_load_production_with_options(self, temp_secrets_file_production: Path) -> None:
        """Production 모드 + 선택 항목"""
        secrets = load_secrets(temp_secrets_file_production)

        assert secrets.mode == TradingMode.PRODUCTION
        assert secrets.api_key == "prod_api_key_12345"
        assert secrets.recv_window == 5000
        assert secrets.timeout == 10.0

    def test_file_not_found(self, temp_dir: Path) -> None:
        """파일 없음"""
        with pytest.raises(SecretsLoadError, match="찾을 수 없습니다"):
            load_secrets(temp_dir / "nonexistent.yaml")

    def test_invalid_mode(self, temp_secrets_file_invalid_mode: Path) -> None:
        """유효하지 않은 mode"""
        with pytest.raises(ValueError, match="유효하지 않은 mode"):
            load_secrets(temp_secrets_file_invalid_mode)

    def test_empty_file(self, temp_dir: Path) -> None:
        """빈 파일"""
        empty_file = temp_dir / "empty.yaml"
        empty_file.write_text("", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="비어 있습니다"):
            load_secrets(empty_file)

    def test_missing_mode(self, temp_dir: Path) -> None:
        """mode 필드 누락"""
        content = """
testnet:
  api_key: "key"
  api_secret: "secret"
"""
        file = temp_dir / "no_mode.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'mode' 필드가 없습니다"):
            load_secrets(file)

    def test_missing_mode_section(self, temp_dir: Path) -> None:
        """선택한 mode 섹션 누락"""
        file = temp_dir / "no_section.yaml"
        file.write_text("mode: production\n", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'production' 설정이 없습니다"):
            load_secrets(file)

    def test_missing_api_key(self, temp_dir: Path) -> None:
        """api_key 누락"""
        content = """
mode: testnet
testnet:
  api_secret: "secret"
"""
        file = temp_dir / "no_api_key.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'api_key'가 없습니다"):
            load_secrets(file)

    def test_missing_api_secret(self, temp_dir: Path) -> None:
        """api_secret 누락"""
        content = """
mode: testnet
testnet:
  api_key: "key"
"""
        file = temp_dir / "no_api_secret.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="'api_secret'가 없습니다"):
            load_secrets(file)

    def test_non_numeric_recv_window(self, temp_dir: Path) -> None:
        """recv_window가 숫자가 아님"""
        content = """
mode: testnet
testnet:
  api_key: "key"
  api_secret: "secret"
recv_window: "soon"
"""
        file = temp_dir / "bad_recv.yaml"
        file.write_text(content, encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="recv_window"):
            load_secrets(file)

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """잘못된 YAML 형식"""
        file = temp_dir / "invalid.yaml"
        file.write_text("invalid: yaml: content:", encoding="utf-8")

        with pytest.raises(SecretsLoadError, match="파싱 실패"):
            load_secrets(file)


class TestGetExchangeConfig:
    """get_exchange_config 함수 테스트"""

    def test_testnet_config(self) -> None:
        """Testnet 설정"""
        secrets = Secrets(
            mode=TradingMode.TESTNET,
            api_key="test_key",
            api_secret="test_secret",
            recv_window=5000,
        )

        config = get_exchange_config(secrets)

        assert config.rest_url == BinanceEndpoints.TEST_REST_URL
        assert config.api_key == "test_key"
        assert config.api_secret == "test_secret"
        assert config.recv_window == 5000

    def test_production_config(self) -> None:
        """Production 설정"""
        secrets = Secrets(
            mode=TradingMode.PRODUCTION,
            api_key="prod_key",
            api_secret="prod_secret",
        )

        config = get_exchange_config(secrets)

        assert config.rest_url == BinanceEndpoints.PROD_REST_URL
        assert config.api_key == "prod_key"


class TestSettings:
    """Settings 클래스 테스트"""

    def setup_method(self) -> None:
        """각 테스트 전에 싱글턴 초기화"""
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_singleton(self, temp_secrets_file: Path) -> None:
        """같은 인스턴스 반환"""
        first = get_settings(temp_secrets_file)
        second = get_settings()

        assert first is second

    def test_properties(self, temp_secrets_file: Path) -> None:
        settings = get_settings(temp_secrets_file)

        assert settings.mode == TradingMode.TESTNET
        assert settings.api_key == "test_api_key_abcde"
        assert settings.api_secret == "test_api_secret_fghij"
        assert settings.exchange_config.rest_url == BinanceEndpoints.TEST_REST_URL
