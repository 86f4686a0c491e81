from .booking_intent_repository import BookingIntentRepository as BookingIntentRepository
from .ticket_repository import TicketRepository as TicketRepository
