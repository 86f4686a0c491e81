from .booking_intent import BookingIntent as BookingIntent
from .ticket import Ticket as Ticket
