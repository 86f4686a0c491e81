from decimal import ROUND_HALF_UP, Decimal
from typing import TypedDict

from services.booking.domain.entity import BookingIntent, Ticket
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import (
    BookingIntentRepository,
    TicketRepository,
)
from services.booking.domain.value_object import BookingReference
from services.shared.domain.exception import ResourceNotFoundException


class RouteSales(TypedDict):
    count: int
    revenue: Decimal


class TicketStats(TypedDict):
    total_tickets: int
    total_revenue: Decimal
    average_ticket_price: Decimal
    routes: dict[str, RouteSales]


class TicketQueryService:
    """乗車券の照会・集計ユースケース

    取消（返金要求）された予約の乗車券は一覧と集計から除外する。
    """

    def __init__(
        self,
        ticket_repository: TicketRepository,
        intent_repository: BookingIntentRepository,
    ) -> None:
        self._tickets = ticket_repository
        self._intents = intent_repository

    def get(self, session_id: str) -> Ticket:
        """決済セッション ID で乗車券を取得する"""
        ticket = self._tickets.find_by_id(session_id)
        if ticket is None:
            raise ResourceNotFoundException(f"Ticket not found: {session_id}")
        return ticket

    def get_booking(
        self, reference: BookingReference
    ) -> tuple[BookingIntent, Ticket | None]:
        """予約番号で予約を取得する（乗車券は PAID の場合のみ）"""
        intent = self._intents.find_by_id(reference)
        if intent is None:
            raise ResourceNotFoundException(f"Booking not found: {reference}")
        if intent.status != BookingStatus.PAID:
            return intent, None
        return intent, self._tickets.find_by_id(intent.session_id)

    def list_tickets(self) -> list[Ticket]:
        """有効な乗車券を発券日時の新しい順に返す"""
        valid_sessions = {
            intent.session_id
            for intent in self._intents.find_by_status(BookingStatus.PAID)
        }
        tickets = [t for t in self._tickets.find_all() if t.session_id in valid_sessions]
        return sorted(tickets, key=lambda t: t.issued_at.value, reverse=True)

    def stats(self) -> TicketStats:
        """販売枚数・売上・平均単価・路線別の内訳を集計する"""
        tickets = self.list_tickets()
        total_revenue = sum((t.amount.amount for t in tickets), Decimal("0"))
        routes: dict[str, RouteSales] = {}
        for ticket in tickets:
            route = f"{ticket.trip.origin}-{ticket.trip.destination}"
            sales = routes.setdefault(route, {"count": 0, "revenue": Decimal("0")})
            sales["count"] += 1
            sales["revenue"] += ticket.amount.amount

        average = (
            (total_revenue / len(tickets)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
            if tickets
            else Decimal("0")
        )
        return {
            "total_tickets": len(tickets),
            "total_revenue": total_revenue,
            "average_ticket_price": average,
            "routes": routes,
        }
