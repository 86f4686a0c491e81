from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）"""

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        if self.currency != other.currency:
            raise ValueError("Cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def to_minor_units(self) -> int:
        """決済プロバイダ向けの補助単位（センタボ等）の整数に変換する"""
        scaled = self.amount * self.currency.minor_unit_factor
        return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @classmethod
    def from_minor_units(cls, value: int, currency: Currency) -> Money:
        """補助単位の整数から Money を生成する"""
        return cls(Decimal(value) / currency.minor_unit_factor, currency)

    @classmethod
    def mxn(cls, amount: Decimal) -> Money:
        """メキシコ・ペソで Money を生成"""
        return cls(amount, Currency.mxn())

    @classmethod
    def usd(cls, amount: Decimal) -> Money:
        """米ドルで Money を生成"""
        return cls(amount, Currency.usd())

    @classmethod
    def jpy(cls, amount: Decimal) -> Money:
        """日本円で Money を生成"""
        return cls(amount, Currency.jpy())
