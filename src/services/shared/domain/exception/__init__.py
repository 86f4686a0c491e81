from .exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    FareNotFoundException,
    OptimisticLockException,
    PaymentInProgressException,
    PaymentProviderException,
    PersistenceException,
    ResourceNotFoundException,
    SeatUnavailableException,
    SignatureVerificationException,
    TransactionConflictException,
)

__all__ = [
    "DomainException",
    "ResourceNotFoundException",
    "FareNotFoundException",
    "BusinessRuleViolationException",
    "SeatUnavailableException",
    "PaymentInProgressException",
    "DuplicateResourceException",
    "OptimisticLockException",
    "TransactionConflictException",
    "PaymentProviderException",
    "SignatureVerificationException",
    "PersistenceException",
]
