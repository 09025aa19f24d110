"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: ledger_core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    # 계정 경로 구분자 (Assets:Bank:Checking)
    ACCOUNT_SEPARATOR: str = ":"

    # 자동 분개 템플릿에서 "매칭된 분개의 계정"을 뜻하는 예약 계정명
    PLACEHOLDER_ACCOUNTS: tuple[str, ...] = ("$account", "@account")

    LOG_LEVEL: str = "INFO"
    PROCESS_NAME: str = "ledger"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    LEDGER_CONFIG_FILE: Path = CONFIG_DIR / "ledger.yaml"
