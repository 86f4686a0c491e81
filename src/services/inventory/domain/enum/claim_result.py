from enum import Enum


class ClaimResult(str, Enum):
    """座席確保の結果

    ALREADY_OCCUPIED は例外ではなく想定内の結果（同じ座席を選ぶ利用者の競合）。
    """

    SUCCESS = "SUCCESS"
    ALREADY_OCCUPIED = "ALREADY_OCCUPIED"
