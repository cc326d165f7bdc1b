"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit les fixtures communes : faux serveur
Gemini et application construite autour de lui.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from reading_proxy...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from reading_proxy.app.main import create_app  # noqa: E402
from reading_proxy.core.container import Container  # noqa: E402
from tests.fakes import TEST_API_KEY, FakeGeminiServer, make_settings  # noqa: E402


@pytest.fixture
def gemini_server():
    """Faux endpoint Gemini renvoyant par défaut une lecture réussie."""
    return FakeGeminiServer()


@pytest.fixture
def make_client():
    """Fabrique un TestClient autour d'un faux serveur (clé d'API configurable)."""

    def _make(server: FakeGeminiServer, api_key: str | None = TEST_API_KEY) -> TestClient:
        settings = make_settings(GEMINI_API_KEY=api_key)
        container = Container(settings=settings, llm=server.llm(api_key=api_key))
        return TestClient(create_app(container))

    return _make


@pytest.fixture
def client(gemini_server, make_client):
    """TestClient configuré avec une clé et le faux serveur par défaut."""
    return make_client(gemini_server)
