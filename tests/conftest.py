"""Pytest fixtures for barbearia tests."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from barbearia.auth import AUTH_COOKIE, auth_cookie_value
from barbearia.collection_store import JsonFileStore, MemoryStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def file_store(temp_dir):
    """A JSON file store rooted in a temporary directory."""
    return JsonFileStore(temp_dir / "data")


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def api_client(file_store):
    """Test client whose store is the temporary file store."""
    from barbearia.api import app, get_store

    app.dependency_overrides[get_store] = lambda: file_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_client(api_client):
    """Test client carrying a valid admin cookie."""
    api_client.cookies.set(AUTH_COOKIE, auth_cookie_value("admin"))
    return api_client


def booking_payload(**overrides):
    """A valid booking form submission."""
    payload = {
        "nome": "João Silva",
        "email": "joao@example.com",
        "telefone": "(11) 99999-0000",
        "data": "2099-01-01",
        "hora": "10:00",
        "servico": "corte",
        "observacoes": "",
    }
    payload.update(overrides)
    return payload


def cart_payload(**overrides):
    """A valid add-to-cart request."""
    payload = {
        "produtoId": "pomada-1",
        "nome": "Pomada Modeladora",
        "preco": 10.0,
        "quantidade": 2,
        "imagem": "/images/pomada.jpg",
    }
    payload.update(overrides)
    return payload


def customer_payload(**overrides):
    payload = {
        "nome": "Maria Souza",
        "email": "maria@example.com",
        "telefone": "(11) 98888-0000",
        "endereco": "Rua das Flores, 100",
    }
    payload.update(overrides)
    return payload
