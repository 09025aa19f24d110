"""
타입 정의 모듈

분개(Xact) 상태/플래그/소유권 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class XactState(str, Enum):
    """분개 정산 상태"""

    UNCLEARED = "UNCLEARED"
    PENDING = "PENDING"  # !
    CLEARED = "CLEARED"  # *


class XactFlag(str, Enum):
    """분개 플래그

    - GENERATED: finalize가 만들어낸 분개 (basket 자동 균형, 다중 통화 분할)
    - CALCULATED: 금액이 비어 있어서 역산된 분개
    - AUTO: 자동 분개(AutoEntry) 템플릿에서 생성된 분개
    - VIRTUAL: 가상 분개 (균형 검증 제외)
    - BALANCE: 균형 검증에 참여하는 가상 분개 ([Account])
    """

    GENERATED = "GENERATED"
    CALCULATED = "CALCULATED"
    AUTO = "AUTO"
    VIRTUAL = "VIRTUAL"
    BALANCE = "BALANCE"


class Ownership(str, Enum):
    """분개 소유권

    Entry 정리(dispose) 시 분개를 어떻게 처리할지 결정한다.
    """

    OWNED = "OWNED"  # Entry가 소유, 완전히 해제
    BORROWED_FROM_CACHE = "BORROWED_FROM_CACHE"  # 캐시 아레나 소유, 연결만 해제
    BORROWED_FROM_CALLER = "BORROWED_FROM_CALLER"  # 호출자 소유, 건드리지 않음
