from enum import Enum


class SessionState(str, Enum):
    """決済セッションの状態（プロバイダ側の状態を正規化したもの）"""

    OPEN = "OPEN"
    PAID = "PAID"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"
