from .entity import BookingIntent as BookingIntent
from .entity import Ticket as Ticket
from .enum import BookingStatus as BookingStatus
from .enum import FailureReason as FailureReason
from .factory import BookingIntentFactory as BookingIntentFactory
from .repository import BookingIntentRepository as BookingIntentRepository
from .repository import TicketRepository as TicketRepository
from .value_object import BookingReference as BookingReference
from .value_object import Passenger as Passenger
from .value_object import SeatNumber as SeatNumber
from .value_object import Trip as Trip
