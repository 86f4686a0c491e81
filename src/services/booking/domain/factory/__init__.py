from .booking_intent_factory import BookingIntentFactory as BookingIntentFactory
