from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス

    PENDING 以外はすべて終端状態。
    """

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUND_REQUESTED = "REFUND_REQUESTED"
