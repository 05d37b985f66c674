"""Derived figures for the admin dashboard and booking list."""

from datetime import date as date_type
from typing import Any

from .models import BOOKING_STATUSES, Booking, Contact, Order

UPCOMING_LIMIT = 5


def filter_bookings(
    bookings: list[Booking],
    status: str | None = None,
    date: str | None = None,
) -> list[Booking]:
    """Filter by exact status and/or date, sorted by slot (date, time)."""
    result = [
        b
        for b in bookings
        if (status is None or b.status == status) and (date is None or b.date == date)
    ]
    return sorted(result, key=_slot_key)


def _slot_key(booking: Booking) -> tuple[str, str]:
    # zero-pad "9:30" so it sorts before "10:00"
    return booking.date, booking.time.zfill(5)


def summarize(
    bookings: list[Booking],
    orders: list[Order],
    contacts: list[Contact],
    today: date_type | None = None,
) -> dict[str, Any]:
    """
    Build the dashboard summary.

    Upcoming bookings are those from today onwards that are still pending or
    confirmed. Revenue excludes canceled orders.
    """
    today_str = (today or date_type.today()).isoformat()

    by_status = {s: 0 for s in BOOKING_STATUSES}
    for b in bookings:
        by_status[b.status] = by_status.get(b.status, 0) + 1

    upcoming = [
        b
        for b in sorted(bookings, key=_slot_key)
        if b.date >= today_str and b.status in ("pendente", "confirmado")
    ]

    return {
        "agendamentos": {
            "total": len(bookings),
            "porStatus": by_status,
            "hoje": sum(1 for b in bookings if b.date == today_str),
            "proximos": [b.to_dict() for b in upcoming[:UPCOMING_LIMIT]],
        },
        "pedidos": {
            "total": len(orders),
            "receita": sum(o.total for o in orders if o.status != "cancelado"),
        },
        "contatosNaoLidos": sum(1 for c in contacts if not c.read),
    }
