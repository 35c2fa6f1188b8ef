"""
Inventra Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── valid_payloads: one accepted request body per validated entity
    ├── app_instance:   fresh application with its own in-memory repository
    └── test_client:    HTTPX AsyncClient routed straight into app_instance
"""

import os

# Settings are read at import time: set the environment before importing app.*
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import create_app
from app.services.repository import InMemoryRepository


VALID_PAYLOADS = {
    "usuario": {
        "nombres": "Laura Marcela",
        "apellidos": "Gómez Restrepo",
        "tipo_documento_id": 1,
        "documento": "1023456789",
        "genero_id": 2,
        "telefono": "3001234567",
        "correo": "laura.gomez@sena.edu.co",
        "ficha_id": 4,
        "contrasena": "clave-segura-1",
        "rol_id": 2,
    },
    "rol": {"nombre": "Instructor", "descripcion": "Responsable de un ambiente"},
    "tipo_documento": {"nombre": "Cédula de ciudadanía"},
    "genero": {"nombre": "Femenino"},
    "programa_formacion": {"nombre": "Análisis y desarrollo de software"},
    "ficha": {"ficha": "2758320"},
    "ciudad": {"nombre": "Medellín"},
    "centro": {
        "nombre": "Centro de Servicios y Gestión Empresarial",
        "direccion": "Calle 51 # 57-70",
        "ciudad_id": 1,
    },
    "ambiente": {"nombre": "Ambiente 301", "centro_id": 1},
    "inventario": {
        "nombre": "Inventario Sistemas",
        "fecha_creacion": "2024-03-15",
        "usuario_admin_id": 1,
    },
    "tipo_elemento": {
        "nombre": "Computador portátil",
        "consecutivo": 1,
        "descripcion": "Equipo para formación",
        "marca": "Lenovo",
        "modelo": "ThinkPad E14",
        "atributos": "RAM 16GB, SSD 512GB",
    },
    "estado": {"nombre": "Activo"},
    "elemento": {
        "placa": 9212345,
        "serial": "PF3ABC12",
        "tipoElementoId": 1,
        "fechaAdquisicion": "2023-08-01",
        "valorMonetario": 3250000.5,
        "estadoId": 1,
        "estadoActivo": True,
        "ambienteId": 1,
        "inventarioId": 1,
    },
    "reporte": {
        "asunto": "Pantalla dañada",
        "mensaje": "La pantalla presenta líneas verticales desde ayer.",
        "usuario_id": 1,
        "elemento_id": 1,
    },
}


@pytest.fixture
def valid_payloads():
    """
    One accepted body per entity key.

    Returns a deep-enough copy so tests can mutate the dicts freely.
    """
    return {key: dict(payload) for key, payload in VALID_PAYLOADS.items()}


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def app_instance(repository):
    """A fresh app per test so repository state never leaks between tests."""
    return create_app(repository=repository)


@pytest_asyncio.fixture
async def test_client(app_instance):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
