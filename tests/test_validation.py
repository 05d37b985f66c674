"""Tests for request payload validation."""

from datetime import datetime

import pytest

from barbearia.errors import ValidationFailedError
from barbearia.validation import (
    require_fields,
    validate_booking,
    validate_booking_update,
    validate_cart_item,
    validate_date,
    validate_email,
    validate_future,
    validate_quantity,
    validate_time,
)

from .conftest import booking_payload, cart_payload


class TestRequireFields:
    def test_all_present(self):
        require_fields({"a": "x", "b": 1}, ["a", "b"])

    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            require_fields({"a": "", "b": None, "c": "ok"}, ["a", "b", "c", "d"])

        assert str(exc_info.value) == "Campos obrigatórios: a, b, d"
        assert exc_info.value.fields == ["a", "b", "d"]


class TestPatterns:
    @pytest.mark.parametrize("value", ["a@b.co", "joao.silva@mail.com.br"])
    def test_valid_email(self, value):
        validate_email(value)

    @pytest.mark.parametrize("value", ["joao", "joao@mail", "jo ao@mail.com", "@mail.com"])
    def test_invalid_email(self, value):
        with pytest.raises(ValidationFailedError, match="Email inválido"):
            validate_email(value)

    @pytest.mark.parametrize("value", ["01/02/2099", "2099-1-1", "20990101", "2099-01-01\n"])
    def test_invalid_date(self, value):
        with pytest.raises(ValidationFailedError, match="YYYY-MM-DD"):
            validate_date(value)

    @pytest.mark.parametrize("value", ["00:00", "9:30", "23:59"])
    def test_valid_time(self, value):
        validate_time(value)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "12h30", "1230"])
    def test_invalid_time(self, value):
        with pytest.raises(ValidationFailedError, match="HH:MM"):
            validate_time(value)


class TestFutureSlot:
    NOW = datetime(2030, 6, 15, 10, 0)

    def test_future_accepted(self):
        validate_future("2030-06-15", "10:01", now=self.NOW)

    def test_now_rejected(self):
        with pytest.raises(ValidationFailedError, match="futuro"):
            validate_future("2030-06-15", "10:00", now=self.NOW)

    def test_past_rejected(self):
        with pytest.raises(ValidationFailedError):
            validate_future("2030-06-14", "18:00", now=self.NOW)

    def test_impossible_date_rejected(self):
        with pytest.raises(ValidationFailedError, match="Data inválida"):
            validate_future("2030-13-45", "10:00", now=self.NOW)


class TestQuantity:
    @pytest.mark.parametrize("value", [0, -2, "3", True, None])
    def test_invalid(self, value):
        with pytest.raises(ValidationFailedError):
            validate_quantity(value)

    def test_valid(self):
        validate_quantity(1)


class TestPayloads:
    def test_valid_booking(self):
        validate_booking(booking_payload())

    def test_booking_checks_presence_first(self):
        with pytest.raises(ValidationFailedError, match="Campos obrigatórios: email, hora"):
            validate_booking(booking_payload(email="", hora=None))

    def test_booking_in_the_past(self):
        with pytest.raises(ValidationFailedError, match="futuro"):
            validate_booking(booking_payload(data="2000-01-01"))

    def test_booking_update_status(self):
        validate_booking_update({"status": "concluido"})
        with pytest.raises(ValidationFailedError, match="Status inválido"):
            validate_booking_update({"status": "arquivado"})

    def test_booking_update_checks_present_fields_only(self):
        validate_booking_update({"nome": "Outro"})
        with pytest.raises(ValidationFailedError):
            validate_booking_update({"hora": "25:00"})

    def test_cart_item_zero_quantity_is_missing(self):
        with pytest.raises(ValidationFailedError, match="quantidade"):
            validate_cart_item(cart_payload(quantidade=0))

    def test_cart_item_negative_quantity(self):
        with pytest.raises(ValidationFailedError, match="pelo menos 1"):
            validate_cart_item(cart_payload(quantidade=-1))
