from .booking_reference import BookingReference as BookingReference
from .passenger import Passenger as Passenger
from .seat_number import SeatNumber as SeatNumber
from .trip import Trip as Trip
