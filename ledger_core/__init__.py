"""
ledger_core - 복식부기 분개 균형 처리 엔진

- value: Commodity / Amount / Balance
- journal: Xact / Entry / AutoEntry / Journal
- config: ledger.yaml 로더
"""

__version__ = "0.1.0"
