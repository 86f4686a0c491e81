from .seat_ledger_entry import SeatLedgerEntry as SeatLedgerEntry
