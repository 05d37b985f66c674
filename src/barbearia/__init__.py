"""barbearia - bookings, cart and orders for the barbershop site."""

__version__ = "0.1.0"
