from enum import Enum


class FailureReason(str, Enum):
    """予約失敗の理由"""

    # 決済は完了したが、確定時に座席がすでに埋まっていた（返金対象）
    SEAT_CONFLICT = "SEAT_CONFLICT"
    PAYMENT_DECLINED = "PAYMENT_DECLINED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
