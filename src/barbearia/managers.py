"""Entity managers: typed CRUD over one collection each."""

import logging
from typing import Any, Generic, TypeVar

from .collection_store import Collection, CollectionStore
from .errors import CartEmptyError
from .models import Booking, CartItem, Contact, Customer, Order, _generate_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields assigned at creation that a partial update may not overwrite
_IMMUTABLE_FIELDS = ("id", "createdAt")


class _CollectionManager(Generic[T]):
    """Shared read/scan/delete logic for a single collection."""

    collection: Collection
    model: type

    def __init__(self, store: CollectionStore):
        self.store = store

    def _load(self) -> list[dict[str, Any]]:
        return self.store.read_all(self.collection)

    def _save(self, records: list[dict[str, Any]]) -> None:
        self.store.write_all(self.collection, records)

    def _decode(self, record: dict[str, Any]) -> T | None:
        try:
            return self.model.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Skipping malformed record in %s: %r (%s)",
                self.collection.value,
                record.get("id"),
                e,
            )
            return None

    def get_all(self) -> list[T]:
        entities = (self._decode(r) for r in self._load())
        return [e for e in entities if e is not None]

    def get_by_id(self, entity_id: str) -> T | None:
        for entity in self.get_all():
            if entity.id == entity_id:
                return entity
        return None

    def _append(self, entity: T) -> T:
        records = self._load()
        records.append(entity.to_dict())
        self._save(records)
        return entity

    def _merge(self, entity_id: str, partial: dict[str, Any]) -> T | None:
        records = self._load()
        for i, record in enumerate(records):
            if str(record.get("id")) == entity_id:
                changes = {k: v for k, v in partial.items() if k not in _IMMUTABLE_FIELDS}
                merged = {**record, **changes}
                entity = self._decode(merged)
                if entity is None:
                    return None
                records[i] = merged
                self._save(records)
                return entity
        return None

    def _remove(self, entity_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if str(r.get("id")) != entity_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        return True


class BookingManager(_CollectionManager[Booking]):
    """Bookings made through the public booking form."""

    collection = Collection.BOOKINGS
    model = Booking

    def save(
        self,
        name: str,
        email: str,
        phone: str,
        date: str,
        time: str,
        service: str,
        notes: str = "",
    ) -> Booking:
        """
        Persist a new booking with status "pendente".

        Raises:
            StorageUnavailableError: If the store refuses the write.
        """
        booking = Booking.create(
            name=name,
            email=email,
            phone=phone,
            date=date,
            time=time,
            service=service,
            notes=notes,
        )
        return self._append(booking)

    def update(self, booking_id: str, partial: dict[str, Any]) -> Booking | None:
        """
        Shallow-merge external fields (e.g. {"status": "confirmado"}) onto a booking.

        Returns None, without writing, if the booking doesn't exist.
        """
        return self._merge(booking_id, partial)

    def delete(self, booking_id: str) -> bool:
        return self._remove(booking_id)


class ContactManager(_CollectionManager[Contact]):
    """Messages sent through the contact form."""

    collection = Collection.CONTACTS
    model = Contact

    def save(
        self, name: str, email: str, phone: str, service: str, message: str
    ) -> Contact:
        contact = Contact.create(
            name=name, email=email, phone=phone, service=service, message=message
        )
        return self._append(contact)

    def mark_read(self, contact_id: str) -> Contact | None:
        return self._merge(contact_id, {"lido": True})


class CartManager(_CollectionManager[CartItem]):
    """The active shopping cart. Rows are unique per product."""

    collection = Collection.CART
    model = CartItem

    def get_items(self) -> list[CartItem]:
        return self.get_all()

    def add_item(
        self,
        product_id: str,
        name: str,
        unit_price: float,
        quantity: int,
        image: str = "",
    ) -> CartItem:
        """
        Add a product to the cart.

        If the product is already in the cart its quantity is incremented
        instead of adding a second row.
        """
        records = self._load()
        for record in records:
            if str(record.get("produtoId")) == str(product_id):
                record["quantidade"] = record.get("quantidade", 0) + quantity
                self._save(records)
                return CartItem.from_dict(record)

        item = CartItem(
            id=_generate_id(),
            product_id=str(product_id),
            name=name,
            unit_price=unit_price,
            quantity=quantity,
            image=image,
        )
        records.append(item.to_dict())
        self._save(records)
        return item

    def update_item(self, item_id: str, quantity: int) -> CartItem | None:
        """
        Set an item's quantity.

        A quantity of zero or less removes the row. Returns the updated item,
        or None if the item was removed or doesn't exist.
        """
        records = self._load()
        for record in records:
            if str(record.get("id")) == item_id:
                if quantity <= 0:
                    self._remove(item_id)
                    return None
                record["quantidade"] = quantity
                self._save(records)
                return CartItem.from_dict(record)
        return None

    def remove_item(self, item_id: str) -> bool:
        return self._remove(item_id)

    def clear(self) -> None:
        self._save([])

    def get_total(self) -> float:
        return sum(item.subtotal for item in self.get_items())

    def summary(self) -> dict[str, Any]:
        """Cart contents as returned by the cart endpoints."""
        items = self.get_items()
        return {
            "items": [i.to_dict() for i in items],
            "total": sum(i.subtotal for i in items),
            "quantidade": len(items),
        }


class OrderManager(_CollectionManager[Order]):
    """Orders created by checking out the cart."""

    collection = Collection.ORDERS
    model = Order

    def __init__(self, store: CollectionStore, cart: CartManager | None = None):
        super().__init__(store)
        self.cart = cart or CartManager(store)

    def create(self, customer: Customer) -> Order:
        """
        Check out the current cart.

        Snapshots the cart items and total into a new pending order, writes
        it, then clears the cart. If clearing the cart fails the order is
        removed again before the error propagates.

        Raises:
            CartEmptyError: If the cart has no items.
            StorageUnavailableError: If the store refuses a write.
        """
        items = self.cart.get_items()
        if not items:
            raise CartEmptyError()

        order = Order.create(customer, items)
        previous = self._load()
        self._save(previous + [order.to_dict()])

        try:
            self.cart.clear()
        except Exception:
            logger.error("Cart clear failed after writing order %s; rolling back", order.id)
            try:
                self._save(previous)
            except Exception:
                logger.error("Rollback of order %s failed", order.id)
            raise

        logger.info("Created order %s with %d item(s)", order.id, len(order.items))
        return order

    def update_status(self, order_id: str, status: str) -> Order | None:
        return self._merge(order_id, {"status": status})
