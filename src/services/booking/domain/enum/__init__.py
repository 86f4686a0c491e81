from .booking_status import BookingStatus as BookingStatus
from .failure_reason import FailureReason as FailureReason
