from .checkout_session import CheckoutSession as CheckoutSession
from .checkout_session import SessionStatus as SessionStatus
from .checkout_session import WebhookEvent as WebhookEvent
