from dataclasses import dataclass


@dataclass(frozen=True)
class SeatNumber:
    """座席番号（1 以上の整数。上限は路線の座席数で別途検証する）"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Seat number must be an integer: {self.value!r}")
        if self.value < 1:
            raise ValueError(f"Seat number must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)
