from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Currency:
    """通貨コード（ISO 4217）

    サポート対象: MXN, USD, JPY
    """

    SUPPORTED: ClassVar[frozenset[str]] = frozenset({"MXN", "USD", "JPY"})

    # 補助単位を持たない通貨（決済プロバイダへは金額をそのまま渡す）
    ZERO_DECIMAL: ClassVar[frozenset[str]] = frozenset({"JPY"})

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.upper()
        if normalized not in self.SUPPORTED:
            raise ValueError(
                f"Unsupported currency: {self.code}. "
                f"Supported: {', '.join(sorted(self.SUPPORTED))}"
            )
        object.__setattr__(self, "code", normalized)

    def __str__(self) -> str:
        return self.code

    @property
    def minor_unit_factor(self) -> int:
        """1単位あたりの補助単位数（MXN なら 100 センタボ）"""
        return 1 if self.code in self.ZERO_DECIMAL else 100

    @classmethod
    def mxn(cls) -> Currency:
        """メキシコ・ペソ"""
        return cls("MXN")

    @classmethod
    def usd(cls) -> Currency:
        """米ドル"""
        return cls("USD")

    @classmethod
    def jpy(cls) -> Currency:
        """日本円"""
        return cls("JPY")
