from .entity import SeatLedgerEntry as SeatLedgerEntry
from .enum import ClaimResult as ClaimResult
from .repository import SeatLedgerRepository as SeatLedgerRepository
