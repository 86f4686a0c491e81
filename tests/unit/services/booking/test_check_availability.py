import pytest

from services.shared.domain.exception import FareNotFoundException


class TestCheckAvailability:
    def test_no_inventory_means_all_free(self, container, travel_date):
        occupied = container.check_availability.occupied_seats(
            "Ciudad de México", "Guadalajara", travel_date, "06:00"
        )

        assert occupied == frozenset()

    def test_occupied_seats_are_reported(self, container, trip_key, travel_date):
        container.seat_ledger.claim(trip_key, "7")
        container.seat_ledger.claim(trip_key, "12")

        availability = container.check_availability.availability(
            " ciudad de méxico", "GUADALAJARA", travel_date, "6:00"
        )

        assert availability.occupied_seats == [7, 12]
        assert availability.total_seats == 48
        assert availability.available_count == 46

    def test_other_dates_are_isolated(self, container, trip_key):
        container.seat_ledger.claim(trip_key, "7")

        occupied = container.check_availability.occupied_seats(
            "Ciudad de México", "Guadalajara", "2030-01-16", "06:00"
        )

        assert occupied == frozenset()

    def test_malformed_input_matches_nothing(self, container, trip_key):
        container.seat_ledger.claim(trip_key, "7")

        assert (
            container.check_availability.occupied_seats(
                "Ciudad de México", "Guadalajara", "15/01/2030", "6h"
            )
            == frozenset()
        )

    def test_unknown_route_raises_error(self, container, travel_date):
        with pytest.raises(FareNotFoundException):
            container.check_availability.availability(
                "Tijuana", "Cancún", travel_date, "06:00"
            )
