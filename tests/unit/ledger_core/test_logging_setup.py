"""
ledger_core/logging.py 테스트

핸들러 구성, 파일 생성, finalize 추적 로그 억제
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from ledger_core.config import Settings, load_config
from ledger_core.constants import Paths
from ledger_core.logging import (
    NOISY_LOGGERS,
    get_log_file_path,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 상태 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}

    yield root

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_handlers(self, temp_dir: Path, restore_root_logger: logging.Logger) -> None:
        """콘솔 + 일별 파일 핸들러"""
        root = setup_logging("test", log_dir=temp_dir)

        assert root is restore_root_logger
        assert len(root.handlers) == 2
        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].suffix == "%Y-%m-%d"
        assert (temp_dir / "test.log").exists()

    def test_repeated_setup_replaces_handlers(
        self, temp_dir: Path, restore_root_logger: logging.Logger
    ) -> None:
        """중복 호출 시 핸들러가 늘어나지 않음"""
        setup_logging("test", log_dir=temp_dir)
        root = setup_logging("test", log_dir=temp_dir)

        assert len(root.handlers) == 2

    def test_noisy_loggers_quiet_by_default(
        self, temp_dir: Path, restore_root_logger: logging.Logger
    ) -> None:
        """DEBUG가 아니면 finalize 추적 로그 억제"""
        setup_logging("test", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.INFO

    def test_debug_keeps_noisy_loggers(
        self, temp_dir: Path, restore_root_logger: logging.Logger
    ) -> None:
        """DEBUG 레벨이면 추적 로그 유지"""
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

        setup_logging("test", console_level=logging.DEBUG, log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.NOTSET


class TestSetupLoggingFromConfig:
    """setup_logging_from_config 테스트"""

    def setup_method(self) -> None:
        """각 테스트 전에 싱글턴 초기화"""
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_level_from_config(
        self,
        temp_dir: Path,
        temp_config_file: Path,
        restore_root_logger: logging.Logger,
    ) -> None:
        """ledger.yaml의 log_level(debug)이 두 핸들러에 적용"""
        root = setup_logging_from_config(load_config(temp_config_file), "test", temp_dir)

        assert [handler.level for handler in root.handlers] == [logging.DEBUG, logging.DEBUG]

    def test_level_from_settings(
        self,
        temp_dir: Path,
        temp_config_file_minimal: Path,
        restore_root_logger: logging.Logger,
    ) -> None:
        """config를 생략하면 Settings의 설정 사용"""
        Settings(temp_config_file_minimal)

        root = setup_logging_from_config(process_name="test", log_dir=temp_dir)

        assert [handler.level for handler in root.handlers] == [logging.INFO, logging.INFO]
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.INFO


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dir(self) -> None:
        """기본 디렉토리와 프로세스 이름"""
        assert get_log_file_path() == Paths.LOGS_DIR / "ledger.log"

    def test_custom_dir(self, temp_dir: Path) -> None:
        """지정 디렉토리"""
        assert get_log_file_path("import", temp_dir) == temp_dir / "import.log"
