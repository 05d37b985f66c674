"""Custom exceptions for barbearia."""


class BarbeariaError(Exception):
    """Base exception for all barbearia errors."""

    pass


class ValidationFailedError(BarbeariaError):
    """Raised when a request payload fails boundary validation."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(message)


class BookingNotFoundError(BarbeariaError):
    """Raised when a booking ID doesn't exist."""

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Agendamento não encontrado: {booking_id}")


class ContactNotFoundError(BarbeariaError):
    """Raised when a contact message ID doesn't exist."""

    def __init__(self, contact_id: str):
        self.contact_id = contact_id
        super().__init__(f"Mensagem não encontrada: {contact_id}")


class CartItemNotFoundError(BarbeariaError):
    """Raised when a cart item ID doesn't exist."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item não encontrado no carrinho: {item_id}")


class OrderNotFoundError(BarbeariaError):
    """Raised when an order ID doesn't exist."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Pedido não encontrado: {order_id}")


class CartEmptyError(BarbeariaError):
    """Raised when checking out with no items in the cart."""

    def __init__(self):
        super().__init__("O carrinho está vazio")


class StorageUnavailableError(BarbeariaError):
    """Raised when the storage medium refuses a write."""

    def __init__(self, reason: str | None = None):
        self.reason = reason
        msg = "Armazenamento indisponível"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class InvalidCredentialsError(BarbeariaError):
    """Raised when the admin login does not match the configured pair."""

    def __init__(self):
        super().__init__("Usuário ou senha incorretos.")
