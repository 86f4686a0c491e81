from .currency import Currency
from .iso_date_time import IsoDateTime
from .money import Money
from .trip_key import TripKey

__all__ = ["Currency", "IsoDateTime", "Money", "TripKey"]
