"""Request payload validation for barbearia.

These checks run at the HTTP/CLI boundary. The managers trust their input.
"""

import re
from datetime import datetime
from typing import Any, Iterable

from .errors import ValidationFailedError
from .models import BOOKING_STATUSES, ORDER_STATUSES

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$", re.ASCII)

BOOKING_FIELDS = ("nome", "email", "telefone", "data", "hora", "servico")
CONTACT_FIELDS = ("nome", "email", "telefone", "servico", "mensagem")
CART_ITEM_FIELDS = ("produtoId", "nome", "preco", "quantidade", "imagem")
CUSTOMER_FIELDS = ("nome", "email", "telefone", "endereco")


def require_fields(body: dict[str, Any], fields: Iterable[str]) -> None:
    """
    Check that every field is present and non-empty.

    Raises:
        ValidationFailedError: Listing all missing fields.
    """
    missing = [f for f in fields if not body.get(f)]
    if missing:
        raise ValidationFailedError(
            f"Campos obrigatórios: {', '.join(missing)}", missing
        )


def validate_email(value: str) -> None:
    if not EMAIL_RE.fullmatch(value):
        raise ValidationFailedError("Email inválido", ["email"])


def validate_date(value: str) -> None:
    if not DATE_RE.fullmatch(value):
        raise ValidationFailedError("Formato de data inválido. Use YYYY-MM-DD", ["data"])


def validate_time(value: str) -> None:
    if not TIME_RE.fullmatch(value):
        raise ValidationFailedError("Formato de hora inválido. Use HH:MM", ["hora"])


def parse_slot(date: str, time: str) -> datetime:
    """Combine a YYYY-MM-DD date and HH:MM time into a naive local datetime."""
    try:
        return datetime.strptime(f"{date} {time}", "%Y-%m-%d %H:%M")
    except ValueError:
        raise ValidationFailedError("Data inválida", ["data"])


def validate_future(date: str, time: str, now: datetime | None = None) -> None:
    """Reject a slot that is not strictly after ``now`` (local time)."""
    slot = parse_slot(date, time)
    if slot <= (now or datetime.now()):
        raise ValidationFailedError(
            "A data e hora do agendamento deve ser no futuro", ["data", "hora"]
        )


def validate_quantity(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 1:
        raise ValidationFailedError("A quantidade deve ser pelo menos 1", ["quantidade"])


def validate_booking_status(status: str) -> None:
    if status not in BOOKING_STATUSES:
        raise ValidationFailedError("Status inválido", ["status"])


def validate_order_status(status: str) -> None:
    if status not in ORDER_STATUSES:
        raise ValidationFailedError("Status inválido", ["status"])


def validate_booking(body: dict[str, Any], now: datetime | None = None) -> None:
    """Validate a new booking submission, checks applied in order."""
    require_fields(body, BOOKING_FIELDS)
    validate_email(body["email"])
    validate_date(body["data"])
    validate_time(body["hora"])
    validate_future(body["data"], body["hora"], now=now)


def validate_booking_update(body: dict[str, Any]) -> None:
    """Validate the fields present in a partial booking update."""
    if "status" in body:
        validate_booking_status(body["status"])
    if "email" in body:
        validate_email(body["email"])
    if "data" in body:
        validate_date(body["data"])
    if "hora" in body:
        validate_time(body["hora"])


def validate_contact(body: dict[str, Any]) -> None:
    require_fields(body, CONTACT_FIELDS)
    validate_email(body["email"])


def validate_cart_item(body: dict[str, Any]) -> None:
    require_fields(body, CART_ITEM_FIELDS)
    validate_quantity(body["quantidade"])


def validate_customer(body: dict[str, Any]) -> None:
    require_fields(body, CUSTOMER_FIELDS)
    validate_email(body["email"])
