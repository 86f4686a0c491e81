"""Lambda ハンドラから使うサービス群の組み立て

ハンドラはコールドスタート時に get_container() で一度だけ組み立てたものを使い回す。
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.applications.check_availability import (
    CheckAvailabilityService,
)
from services.booking.applications.confirm_booking import ConfirmBookingService
from services.booking.applications.expire_pending_bookings import (
    ExpirePendingBookingsService,
)
from services.booking.applications.handle_payment_webhook import (
    HandlePaymentWebhookService,
)
from services.booking.applications.request_refund import RequestRefundService
from services.booking.applications.start_checkout import StartCheckoutService
from services.booking.applications.ticket_query import TicketQueryService
from services.booking.domain.factory import BookingIntentFactory
from services.booking.infrastructure.key_value_booking_intent_repository import (
    KeyValueBookingIntentRepository,
)
from services.booking.infrastructure.key_value_ticket_repository import (
    KeyValueTicketRepository,
)
from services.inventory.applications.seat_ledger import SeatLedger
from services.inventory.infrastructure.key_value_seat_ledger_repository import (
    KeyValueSeatLedgerRepository,
)
from services.payment.domain.gateway import PaymentGateway
from services.payment.infrastructure.gateway_factory import create_payment_gateway
from services.route.applications.fare_resolver import FareResolver
from services.route.applications.manage_route import ManageRouteService
from services.route.domain.factory import RouteFactory
from services.route.infrastructure.key_value_route_repository import (
    KeyValueRouteRepository,
)
from services.shared.config import Settings
from services.shared.domain import Currency, IsoDateTime, KeyValueStore
from services.shared.infrastructure import create_store


@dataclass(frozen=True)
class Container:
    settings: Settings
    store: KeyValueStore
    gateway: PaymentGateway
    seat_ledger: SeatLedger
    fare_resolver: FareResolver
    manage_route: ManageRouteService
    start_checkout: StartCheckoutService
    confirm_booking: ConfirmBookingService
    cancel_booking: CancelBookingService
    check_availability: CheckAvailabilityService
    handle_payment_webhook: HandlePaymentWebhookService
    expire_pending_bookings: ExpirePendingBookingsService
    ticket_query: TicketQueryService


def build_container(
    settings: Settings,
    store: KeyValueStore | None = None,
    gateway: PaymentGateway | None = None,
    clock: Callable[[], IsoDateTime] = IsoDateTime.now,
) -> Container:
    """設定からサービス群を組み立てる（テストではストアとゲートウェイを差し替える）"""
    store = store or create_store(settings)
    gateway = gateway or create_payment_gateway(settings)
    tz = ZoneInfo(settings.timezone)

    route_repository = KeyValueRouteRepository(store)
    intent_repository = KeyValueBookingIntentRepository(store)
    ticket_repository = KeyValueTicketRepository(store)

    seat_ledger = SeatLedger(KeyValueSeatLedgerRepository(store), store)
    fare_resolver = FareResolver(route_repository)
    refunds = RequestRefundService(intent_repository, gateway)
    confirmation = ConfirmBookingService(
        intent_repository=intent_repository,
        ticket_repository=ticket_repository,
        seat_ledger=seat_ledger,
        gateway=gateway,
        store=store,
        refunds=refunds,
        clock=clock,
    )

    return Container(
        settings=settings,
        store=store,
        gateway=gateway,
        seat_ledger=seat_ledger,
        fare_resolver=fare_resolver,
        manage_route=ManageRouteService(
            route_repository, RouteFactory(Currency(settings.currency))
        ),
        start_checkout=StartCheckoutService(
            intent_repository=intent_repository,
            factory=BookingIntentFactory(),
            fare_resolver=fare_resolver,
            seat_ledger=seat_ledger,
            gateway=gateway,
            success_url=settings.success_url,
            cancel_url=settings.cancel_url,
            tz=tz,
            clock=clock,
        ),
        confirm_booking=confirmation,
        cancel_booking=CancelBookingService(
            intent_repository=intent_repository,
            seat_ledger=seat_ledger,
            gateway=gateway,
            store=store,
            confirmation=confirmation,
            refunds=refunds,
            tz=tz,
            cutoff=timedelta(hours=settings.cancellation_cutoff_hours),
            clock=clock,
        ),
        check_availability=CheckAvailabilityService(seat_ledger, fare_resolver),
        handle_payment_webhook=HandlePaymentWebhookService(gateway, confirmation),
        expire_pending_bookings=ExpirePendingBookingsService(
            intent_repository=intent_repository,
            gateway=gateway,
            confirmation=confirmation,
            refunds=refunds,
            ttl=timedelta(minutes=settings.pending_booking_ttl_minutes),
            clock=clock,
        ),
        ticket_query=TicketQueryService(ticket_repository, intent_repository),
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_container(Settings.from_env())
