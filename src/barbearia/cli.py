"""Command-line interface for barbearia."""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .collection_store import JsonFileStore
from .errors import BarbeariaError, BookingNotFoundError, OrderNotFoundError
from .managers import BookingManager, CartManager, ContactManager, OrderManager
from .models import BOOKING_STATUSES, ORDER_STATUSES
from .validation import validate_booking_status, validate_order_status


def get_store(args: argparse.Namespace) -> JsonFileStore:
    """Get the store for --data-dir, or the default data directory."""
    return JsonFileStore(Path(args.data_dir) if args.data_dir else None)


def cmd_bookings_list(args: argparse.Namespace) -> int:
    """List bookings."""
    try:
        bookings = BookingManager(get_store(args)).get_all()
        if args.status:
            bookings = [b for b in bookings if b.status == args.status]

        if not bookings:
            print("No bookings found.")
            return 0

        if args.json:
            print(json.dumps([b.to_dict() for b in bookings], indent=2, ensure_ascii=False))
        else:
            print(f"Bookings ({len(bookings)}):")
            print()
            for b in bookings:
                print(f"  {b.id[:8]}  {b.date} {b.time}  [{b.status}]  {b.name}")
                print(f"            {b.service} - {b.phone} - {b.email}")

        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _resolve_booking(manager: BookingManager, prefix: str) -> str:
    matches = [b for b in manager.get_all() if b.id.startswith(prefix)]
    if len(matches) != 1:
        raise BookingNotFoundError(prefix)
    return matches[0].id


def cmd_bookings_status(args: argparse.Namespace) -> int:
    """Change a booking's status."""
    try:
        validate_booking_status(args.status)
        manager = BookingManager(get_store(args))
        booking_id = _resolve_booking(manager, args.booking_id)
        booking = manager.update(booking_id, {"status": args.status})
        if booking is None:
            raise BookingNotFoundError(booking_id)
        print(f"Booking {booking.id[:8]} is now {booking.status}")
        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_bookings_delete(args: argparse.Namespace) -> int:
    """Delete a booking."""
    try:
        manager = BookingManager(get_store(args))
        booking_id = _resolve_booking(manager, args.booking_id)
        manager.delete(booking_id)
        print(f"Deleted booking: {booking_id[:8]}")
        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_orders_list(args: argparse.Namespace) -> int:
    """List orders."""
    try:
        orders = OrderManager(get_store(args)).get_all()

        if not orders:
            print("No orders found.")
            return 0

        if args.json:
            print(json.dumps([o.to_dict() for o in orders], indent=2, ensure_ascii=False))
        else:
            print(f"Orders ({len(orders)}):")
            print()
            for o in orders:
                print(f"  {o.id[:8]}  {o.created_at}  [{o.status}]  R$ {o.total:.2f}")
                print(f"            {o.customer.name} - {len(o.items)} item(s)")

        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_orders_status(args: argparse.Namespace) -> int:
    """Change an order's status."""
    try:
        validate_order_status(args.status)
        manager = OrderManager(get_store(args))
        matches = [o for o in manager.get_all() if o.id.startswith(args.order_id)]
        if len(matches) != 1:
            raise OrderNotFoundError(args.order_id)
        order = manager.update_status(matches[0].id, args.status)
        print(f"Order {order.id[:8]} is now {order.status}")
        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_contacts_list(args: argparse.Namespace) -> int:
    """List contact messages."""
    try:
        contacts = ContactManager(get_store(args)).get_all()
        if args.unread:
            contacts = [c for c in contacts if not c.read]

        if not contacts:
            print("No messages found.")
            return 0

        print(f"Messages ({len(contacts)}):")
        print()
        for c in contacts:
            flag = " " if c.read else "*"
            print(f"{flag} {c.id[:8]}  {c.created_at}  {c.name} <{c.email}>")
            print(f"            {c.message}")

        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_cart_show(args: argparse.Namespace) -> int:
    """Show the current cart."""
    try:
        cart = CartManager(get_store(args))
        items = cart.get_items()

        if not items:
            print("Cart is empty.")
            return 0

        for i in items:
            print(f"  {i.quantity:>3} x {i.name:<30} R$ {i.subtotal:.2f}")
        print(f"  Total: R$ {cart.get_total():.2f}")
        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_cart_clear(args: argparse.Namespace) -> int:
    """Empty the cart."""
    try:
        CartManager(get_store(args)).clear()
        print("Cart cleared.")
        return 0

    except BarbeariaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        print("Starting barbearia API server...")
        print(f"Data directory: {get_store(args).data_dir}")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "barbearia.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=1,  # Single worker; collections are rewritten whole on every change
        )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="barbearia",
        description="Barbershop bookings, cart and orders: API server and admin tools.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--data-dir", help="Data directory (default: $BARBEARIA_DATA_DIR or <project root>/data)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # bookings (subcommand group)
    bookings_parser = subparsers.add_parser("bookings", help="Manage bookings")
    bookings_subparsers = bookings_parser.add_subparsers(dest="bookings_command")

    bookings_list_parser = bookings_subparsers.add_parser("list", help="List bookings")
    bookings_list_parser.add_argument(
        "--status", "-s", choices=BOOKING_STATUSES, help="Only bookings with this status"
    )
    bookings_list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    bookings_status_parser = bookings_subparsers.add_parser(
        "status", help="Change a booking's status"
    )
    bookings_status_parser.add_argument("booking_id", help="Booking ID (or prefix)")
    bookings_status_parser.add_argument("status", help=f"One of: {', '.join(BOOKING_STATUSES)}")

    bookings_delete_parser = bookings_subparsers.add_parser("delete", help="Delete a booking")
    bookings_delete_parser.add_argument("booking_id", help="Booking ID (or prefix)")

    # orders (subcommand group)
    orders_parser = subparsers.add_parser("orders", help="Manage orders")
    orders_subparsers = orders_parser.add_subparsers(dest="orders_command")

    orders_list_parser = orders_subparsers.add_parser("list", help="List orders")
    orders_list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    orders_status_parser = orders_subparsers.add_parser(
        "status", help="Change an order's status"
    )
    orders_status_parser.add_argument("order_id", help="Order ID (or prefix)")
    orders_status_parser.add_argument("status", help=f"One of: {', '.join(ORDER_STATUSES)}")

    # contacts
    contacts_parser = subparsers.add_parser("contacts", help="List contact messages")
    contacts_parser.add_argument(
        "--unread", "-u", action="store_true", help="Only unread messages"
    )

    # cart (subcommand group)
    cart_parser = subparsers.add_parser("cart", help="Inspect the cart")
    cart_subparsers = cart_parser.add_subparsers(dest="cart_command")
    cart_subparsers.add_parser("show", help="Show cart items and total")
    cart_subparsers.add_parser("clear", help="Empty the cart")

    return parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    groups = {
        "bookings": ("bookings_command", {
            "list": cmd_bookings_list,
            "status": cmd_bookings_status,
            "delete": cmd_bookings_delete,
        }),
        "orders": ("orders_command", {
            "list": cmd_orders_list,
            "status": cmd_orders_status,
        }),
        "cart": ("cart_command", {
            "show": cmd_cart_show,
            "clear": cmd_cart_clear,
        }),
    }

    if args.command in groups:
        dest, handlers = groups[args.command]
        sub = getattr(args, dest, None)
        if not sub:
            parser.parse_args([args.command, "--help"])
            return 0
        return handlers[sub](args)

    commands = {
        "serve": cmd_serve,
        "contacts": cmd_contacts_list,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
