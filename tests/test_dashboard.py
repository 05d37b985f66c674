"""Tests for dashboard aggregates."""

from datetime import date

from barbearia.dashboard import UPCOMING_LIMIT, filter_bookings, summarize
from barbearia.models import Booking, CartItem, Contact, Customer, Order


def _booking(day, time="10:00", status="pendente"):
    booking = Booking.create(
        name="Cliente",
        email="c@example.com",
        phone="1",
        date=day,
        time=time,
        service="corte",
    )
    booking.status = status
    return booking


def _order(total_price, status="pendente"):
    customer = Customer(name="M", email="m@example.com", phone="1", address="Rua A")
    item = CartItem(id="i", product_id="p", name="Pomada", unit_price=total_price, quantity=1)
    order = Order.create(customer, [item])
    order.status = status
    return order


class TestFilterBookings:
    def test_sorted_by_slot(self):
        bookings = [_booking("2030-01-02"), _booking("2030-01-01", "14:00"), _booking("2030-01-01", "8:30")]

        result = filter_bookings(bookings)

        assert [(b.date, b.time) for b in result] == [
            ("2030-01-01", "8:30"),
            ("2030-01-01", "14:00"),
            ("2030-01-02", "10:00"),
        ]

    def test_filters_combine(self):
        bookings = [
            _booking("2030-01-01", status="confirmado"),
            _booking("2030-01-01", status="pendente"),
            _booking("2030-01-02", status="confirmado"),
        ]

        result = filter_bookings(bookings, status="confirmado", date="2030-01-01")

        assert result == [bookings[0]]


class TestSummarize:
    TODAY = date(2030, 1, 10)

    def test_empty(self):
        summary = summarize([], [], [], today=self.TODAY)

        assert summary["agendamentos"]["total"] == 0
        assert summary["agendamentos"]["porStatus"] == {
            "pendente": 0,
            "confirmado": 0,
            "cancelado": 0,
            "concluido": 0,
        }
        assert summary["pedidos"] == {"total": 0, "receita": 0}
        assert summary["contatosNaoLidos"] == 0

    def test_counts_and_upcoming(self):
        bookings = [
            _booking("2030-01-09", status="concluido"),
            _booking("2030-01-10", "9:00"),
            _booking("2030-01-10", "15:00", status="cancelado"),
            _booking("2030-01-11", status="confirmado"),
        ]

        summary = summarize(bookings, [], [], today=self.TODAY)["agendamentos"]

        assert summary["hoje"] == 2
        assert summary["porStatus"]["concluido"] == 1
        assert [b["id"] for b in summary["proximos"]] == [bookings[1].id, bookings[3].id]

    def test_upcoming_is_capped(self):
        bookings = [_booking("2030-02-01", f"{h}:00") for h in range(8, 8 + UPCOMING_LIMIT + 3)]

        summary = summarize(bookings, [], [], today=self.TODAY)

        assert len(summary["agendamentos"]["proximos"]) == UPCOMING_LIMIT

    def test_revenue_excludes_canceled(self):
        orders = [_order(30.0), _order(12.5, status="concluido"), _order(99.0, status="cancelado")]

        summary = summarize([], orders, [], today=self.TODAY)

        assert summary["pedidos"] == {"total": 3, "receita": 42.5}

    def test_unread_contacts(self):
        read = Contact.create("A", "a@example.com", "1", "corte", "Oi")
        read.read = True
        unread = Contact.create("B", "b@example.com", "1", "corte", "Olá")

        summary = summarize([], [], [read, unread], today=self.TODAY)

        assert summary["contatosNaoLidos"] == 1
