"""
pytest 공통 fixture 정의

commodity 생성 순서를 고정한 CommodityPool, 장부, 임시 설정 파일
"""

import tempfile
from pathlib import Path

import pytest

from ledger_core.journal import Journal
from ledger_core.value import CommodityPool


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def pool() -> CommodityPool:
    """commodity 순서 고정 풀: $ → USD → EUR → AAPL"""
    pool = CommodityPool()
    pool.create("$", precision=2, prefix=True)
    pool.create("USD", precision=2)
    pool.create("EUR", precision=2)
    pool.create("AAPL", precision=0)
    return pool


@pytest.fixture
def journal() -> Journal:
    """basket 계정 없는 빈 장부"""
    return Journal()


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 ledger.yaml 파일 생성"""
    content = """# 테스트용 ledger.yaml
basket_account: "Equity:Opening Balances"

placeholder_accounts:
  - "$account"
  - "@account"

log_level: debug
"""
    config_path = temp_dir / "ledger.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_minimal(temp_dir: Path) -> Path:
    """basket 없는 최소 ledger.yaml"""
    config_path = temp_dir / "ledger_minimal.yaml"
    config_path.write_text("log_level: INFO\n", encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_invalid_level(temp_dir: Path) -> Path:
    """잘못된 log_level의 ledger.yaml 파일 생성"""
    config_path = temp_dir / "ledger_invalid.yaml"
    config_path.write_text("log_level: verbose\n", encoding="utf-8")
    return config_path
