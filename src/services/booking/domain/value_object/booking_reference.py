from __future__ import annotations

import re
import secrets
import string
import time
from dataclasses import dataclass

_ALPHABET = string.digits + string.ascii_uppercase


@dataclass(frozen=True)
class BookingReference:
    """予約番号

    フォーマット: "TB" + 英大文字・数字 8〜13 文字
    例: "TBLQ2X9K1AB3CD"
    """

    value: str

    PATTERN = re.compile(r"^TB[A-Z0-9]{8,13}$")

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().upper()
        if not self.PATTERN.match(normalized):
            raise ValueError(f"Invalid booking reference: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> BookingReference:
        """タイムスタンプ（36進数）+ ランダム5文字で新しい予約番号を生成する"""
        timestamp = _to_base36(int(time.time() * 1000))
        random_part = "".join(secrets.choice(_ALPHABET) for _ in range(5))
        return cls(value=f"TB{timestamp}{random_part}")


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits)) or "0"
