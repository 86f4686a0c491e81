from .enum import SessionState as SessionState
from .gateway import PaymentGateway as PaymentGateway
from .value_object import CheckoutSession as CheckoutSession
from .value_object import SessionStatus as SessionStatus
from .value_object import WebhookEvent as WebhookEvent
