"""
설정 로더

ledger.yaml 로드 및 분개 엔진 설정 생성
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from ledger_core.constants import Defaults, Paths


@dataclass(frozen=True)
class LedgerConfig:
    """분개 엔진 설정 (ledger.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    basket_account: str | None = None
    placeholder_accounts: tuple[str, ...] = Defaults.PLACEHOLDER_ACCOUNTS
    log_level: str = Defaults.LOG_LEVEL


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def load_config(path: Path | None = None) -> LedgerConfig:
    """ledger.yaml 파일 로드

    예시:
    ```yaml
    basket_account: "Equity:Opening Balances"
    placeholder_accounts: ["$account", "@account"]
    log_level: DEBUG
    ```

    Args:
        path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        LedgerConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 log_level인 경우
    """
    if path is None:
        path = Paths.LEDGER_CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"ledger.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"ledger.yaml 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("ledger.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise ConfigLoadError("ledger.yaml 최상위는 매핑이어야 합니다")

    # basket 계정 (선택)
    basket_account = data.get("basket_account")
    if basket_account is not None and not isinstance(basket_account, str):
        raise ConfigLoadError("'basket_account'는 문자열이어야 합니다")
    if basket_account is not None and not basket_account.strip():
        raise ConfigLoadError("'basket_account'가 비어 있습니다")

    # 예약 계정명
    placeholders = data.get("placeholder_accounts", list(Defaults.PLACEHOLDER_ACCOUNTS))
    if not isinstance(placeholders, list) or not all(
        isinstance(name, str) and name for name in placeholders
    ):
        raise ConfigLoadError(
            "'placeholder_accounts'는 비어 있지 않은 문자열 목록이어야 합니다"
        )

    # log_level 검증
    log_level = str(data.get("log_level", Defaults.LOG_LEVEL)).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(
            f"유효하지 않은 log_level입니다: '{log_level}'. "
            f"유효한 값: ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']"
        )

    return LedgerConfig(
        basket_account=basket_account.strip() if basket_account else None,
        placeholder_accounts=tuple(placeholders),
        log_level=log_level,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    ledger.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: LedgerConfig | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(config_path)

    @property
    def config(self) -> LedgerConfig:
        """로드된 설정 전체"""
        assert self._config is not None
        return self._config

    @property
    def basket_account(self) -> str | None:
        """단일 분개 자동 균형용 기본 계정"""
        assert self._config is not None
        return self._config.basket_account

    @property
    def log_level(self) -> int:
        """로그 레벨 (logging 모듈 정수값)"""
        assert self._config is not None
        return logging.getLevelName(self._config.log_level)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: ledger.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
