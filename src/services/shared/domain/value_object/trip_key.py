from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class TripKey:
    """便（路線 + 方向 + 日付 + 出発時刻）を一意に表すキー

    出発地・目的地は前後の空白を除去して小文字化するため、
    "Origin " と "origin" は同じ便として扱われる。
    日付の形式は検証しない。不正な日付は実在する在庫と一致しないだけで、
    例外にはならない。
    """

    origin: str
    destination: str
    travel_date: str
    departure_time: str

    SEPARATOR: ClassVar[str] = "|"

    @classmethod
    def encode(
        cls, origin: str, destination: str, travel_date: str, departure_time: str
    ) -> TripKey:
        """自由形式の入力から正規化済みの TripKey を生成する"""
        return cls(
            origin=(origin or "").strip().lower(),
            destination=(destination or "").strip().lower(),
            travel_date=(travel_date or "").strip(),
            departure_time=(departure_time or "").strip(),
        )

    def __str__(self) -> str:
        return self.SEPARATOR.join(
            [self.origin, self.destination, self.travel_date, self.departure_time]
        )
