from services.shared.domain import TripKey


class TestTripKey:
    """TripKey の正規化のテスト"""

    def test_origin_and_destination_are_case_and_whitespace_insensitive(self):
        """大文字小文字・前後の空白が異なっても同じキーになる"""
        a = TripKey.encode("Origin ", "DEST", "2030-01-15", "06:00")
        b = TripKey.encode("origin", " dest", "2030-01-15", "06:00")

        assert a == b
        assert str(a) == "origin|dest|2030-01-15|06:00"

    def test_different_dates_are_isolated(self):
        """同じ路線・時刻でも日付が違えば別のキーになる"""
        a = TripKey.encode("A", "B", "2030-01-15", "06:00")
        b = TripKey.encode("A", "B", "2030-01-16", "06:00")

        assert a != b

    def test_date_and_time_are_trimmed_only(self):
        key = TripKey.encode("A", "B", " 2030-01-15 ", " 06:00 ")

        assert key.travel_date == "2030-01-15"
        assert key.departure_time == "06:00"

    def test_malformed_date_does_not_raise(self):
        """不正な日付でも例外にはならない"""
        key = TripKey.encode("A", "B", "not-a-date", "25:99")

        assert str(key) == "a|b|not-a-date|25:99"

    def test_none_values_become_empty(self):
        key = TripKey.encode(None, None, None, None)

        assert str(key) == "|||"

    def test_is_hashable(self):
        keys = {
            TripKey.encode("A", "B", "2030-01-15", "06:00"),
            TripKey.encode(" a ", "b", "2030-01-15", "06:00"),
        }

        assert len(keys) == 1
