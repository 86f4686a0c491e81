from .seat_ledger_repository import SeatLedgerRepository as SeatLedgerRepository
