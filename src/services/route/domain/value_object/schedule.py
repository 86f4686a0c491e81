from __future__ import annotations

from dataclasses import dataclass, replace

from services.shared.domain import Money
from services.shared.utils.validators import parse_departure_time


@dataclass(frozen=True)
class Schedule:
    """時刻表の1便

    arrival_time は翌日着を "03:30+1" のように表す。
    price はこの便の正規運賃で、決済金額の唯一の根拠となる。
    """

    schedule_id: int
    departure_time: str
    arrival_time: str
    service_class: str
    price: Money

    def __post_init__(self) -> None:
        hour, minute = parse_departure_time(self.departure_time.strip())
        object.__setattr__(self, "departure_time", f"{hour:02d}:{minute:02d}")
        if not self.service_class.strip():
            raise ValueError("Service class cannot be empty")
        if self.price.amount <= 0:
            raise ValueError("Schedule price must be greater than zero")

    def departs_at(self, departure_time: str) -> bool:
        """出発時刻が一致するか（"6:00" と "06:00" は同じ）"""
        try:
            hour, minute = parse_departure_time(departure_time.strip())
        except ValueError:
            return False
        return self.departure_time == f"{hour:02d}:{minute:02d}"

    def with_changes(self, **changes: object) -> Schedule:
        """一部の項目を変更した Schedule を返す"""
        return replace(self, **changes)
