"""Data models for barbearia.

Attribute names are Python-style; ``to_dict``/``from_dict`` use the
Portuguese field names of the persisted JSON so existing data round-trips.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
import uuid

BOOKING_STATUSES = ("pendente", "confirmado", "cancelado", "concluido")
ORDER_STATUSES = ("pendente", "processando", "concluido", "cancelado")


def _utc_now() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _generate_id() -> str:
    """Generate a new record ID."""
    return str(uuid.uuid4())


def _number(value: Any) -> float:
    """Return a stored numeric field, rejecting strings and booleans."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return value


@dataclass
class Booking:
    """An appointment request made through the booking form."""

    id: str
    name: str
    email: str
    phone: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    service: str
    notes: str = ""
    status: str = "pendente"
    created_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "nome": self.name,
            "email": self.email,
            "telefone": self.phone,
            "data": self.date,
            "hora": self.time,
            "servico": self.service,
            "observacoes": self.notes,
            "status": self.status,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Booking":
        return cls(
            id=str(data["id"]),
            name=data["nome"],
            email=data["email"],
            phone=data["telefone"],
            date=data["data"],
            time=data["hora"],
            service=data["servico"],
            notes=data.get("observacoes") or "",
            status=data.get("status", "pendente"),
            created_at=data.get("createdAt", ""),
        )

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        phone: str,
        date: str,
        time: str,
        service: str,
        notes: str = "",
    ) -> "Booking":
        """Create a new pending booking with generated ID and timestamp."""
        return cls(
            id=_generate_id(),
            name=name,
            email=email,
            phone=phone,
            date=date,
            time=time,
            service=service,
            notes=notes,
            status="pendente",
            created_at=_utc_now(),
        )


@dataclass
class Contact:
    """A message sent through the contact form."""

    id: str
    name: str
    email: str
    phone: str
    service: str
    message: str
    created_at: str = field(default_factory=_utc_now)
    read: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "nome": self.name,
            "email": self.email,
            "telefone": self.phone,
            "servico": self.service,
            "mensagem": self.message,
            "createdAt": self.created_at,
            "lido": self.read,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contact":
        return cls(
            id=str(data["id"]),
            name=data["nome"],
            email=data["email"],
            phone=data["telefone"],
            service=data["servico"],
            message=data["mensagem"],
            created_at=data.get("createdAt", ""),
            read=bool(data.get("lido", False)),
        )

    @classmethod
    def create(
        cls, name: str, email: str, phone: str, service: str, message: str
    ) -> "Contact":
        """Create a new unread contact message."""
        return cls(
            id=_generate_id(),
            name=name,
            email=email,
            phone=phone,
            service=service,
            message=message,
            created_at=_utc_now(),
            read=False,
        )


@dataclass
class CartItem:
    """A product line in the shopping cart."""

    id: str
    product_id: str
    name: str
    unit_price: float
    quantity: int  # always >= 1 once persisted
    image: str = ""

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "produtoId": self.product_id,
            "nome": self.name,
            "preco": self.unit_price,
            "quantidade": self.quantity,
            "imagem": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CartItem":
        return cls(
            id=str(data["id"]),
            product_id=str(data["produtoId"]),
            name=data["nome"],
            unit_price=_number(data["preco"]),
            quantity=_number(data["quantidade"]),
            image=data.get("imagem", ""),
        )


@dataclass
class Customer:
    """Checkout details attached to an order."""

    name: str
    email: str
    phone: str
    address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "nome": self.name,
            "email": self.email,
            "telefone": self.phone,
            "endereco": self.address,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Customer":
        return cls(
            name=data["nome"],
            email=data["email"],
            phone=data["telefone"],
            address=data["endereco"],
        )


@dataclass
class Order:
    """A checked-out cart. Items and total are a snapshot taken at creation."""

    id: str
    customer: Customer
    items: list[CartItem]
    total: float
    status: str = "pendente"
    created_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "cliente": self.customer.to_dict(),
            "items": [i.to_dict() for i in self.items],
            "total": self.total,
            "status": self.status,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        return cls(
            id=str(data["id"]),
            customer=Customer.from_dict(data["cliente"]),
            items=[CartItem.from_dict(i) for i in data.get("items", [])],
            total=_number(data["total"]),
            status=data.get("status", "pendente"),
            created_at=data.get("createdAt", ""),
        )

    @classmethod
    def create(cls, customer: Customer, items: list[CartItem]) -> "Order":
        """Create a pending order, computing the total from the item snapshot."""
        return cls(
            id=_generate_id(),
            customer=customer,
            items=list(items),
            total=sum(i.subtotal for i in items),
            status="pendente",
            created_at=_utc_now(),
        )
