from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RouteKey:
    """路線キー（出発地 → 目的地）

    大文字小文字・前後の空白を区別しない。
    例: "Ciudad de México-Guadalajara"
    """

    origin: str
    destination: str

    def __post_init__(self) -> None:
        origin = (self.origin or "").strip()
        destination = (self.destination or "").strip()
        if not origin or not destination:
            raise ValueError("Origin and destination are required")
        if origin.lower() == destination.lower():
            raise ValueError("Origin and destination must be different")
        object.__setattr__(self, "origin", origin.lower())
        object.__setattr__(self, "destination", destination.lower())

    def __str__(self) -> str:
        return f"{self.origin}-{self.destination}"

    @classmethod
    def from_string(cls, value: str) -> RouteKey:
        """"出発地-目的地" 形式の文字列から生成する"""
        origin, separator, destination = value.partition("-")
        if not separator:
            raise ValueError(f"Invalid route key: {value}. Expected Origin-Destination")
        return cls(origin=origin, destination=destination)
