from decimal import Decimal

import pytest

from services.shared.domain import Currency, Money


class TestCurrency:
    def test_code_is_normalized_to_upper_case(self):
        assert Currency("mxn") == Currency.mxn()

    def test_unsupported_currency_raises_error(self):
        with pytest.raises(ValueError):
            Currency("EUR")

    def test_minor_unit_factor(self):
        assert Currency.mxn().minor_unit_factor == 100
        assert Currency.jpy().minor_unit_factor == 1


class TestMoney:
    def test_negative_amount_raises_error(self):
        with pytest.raises(ValueError):
            Money.mxn(Decimal("-1"))

    def test_add_same_currency(self):
        total = Money.mxn(Decimal("450.00")).add(Money.mxn(Decimal("550.00")))

        assert total == Money.mxn(Decimal("1000.00"))

    def test_add_different_currency_raises_error(self):
        with pytest.raises(ValueError):
            Money.mxn(Decimal("1")).add(Money.usd(Decimal("1")))

    @pytest.mark.parametrize(
        "money, expected",
        [
            (Money.mxn(Decimal("450.00")), 45000),
            (Money.mxn(Decimal("0.005")), 1),
            (Money.jpy(Decimal("50000")), 50000),
        ],
    )
    def test_to_minor_units(self, money, expected):
        """決済プロバイダ向けの補助単位に変換する（JPY は補助単位なし）"""
        assert money.to_minor_units() == expected

    def test_from_minor_units(self):
        assert Money.from_minor_units(45000, Currency.mxn()) == Money.mxn(
            Decimal("450")
        )
        assert Money.from_minor_units(50000, Currency.jpy()) == Money.jpy(
            Decimal("50000")
        )
