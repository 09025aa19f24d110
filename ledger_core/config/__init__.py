"""
설정 패키지

ledger.yaml 로드 및 분개 엔진 설정 제공
"""

from ledger_core.config.loader import (
    ConfigLoadError,
    LedgerConfig,
    Settings,
    get_settings,
    load_config,
)

__all__ = [
    "ConfigLoadError",
    "LedgerConfig",
    "Settings",
    "get_settings",
    "load_config",
]
