"""Tests pour l'endpoint de santé de l'application."""

from fastapi.testclient import TestClient

from reading_proxy.app.main import create_app
from reading_proxy.core.container import Container
from reading_proxy.core.http_constants import HTTP_OK
from reading_proxy.infra.llm.fake_deterministic import FakeDeterministicLLM
from tests.fakes import FakeGeminiServer, make_settings


def test_health(client):
    """Teste que l'endpoint de santé retourne un statut OK."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    body = r.json()
    assert body["status"] == "ok"
    assert body["llm_provider"] == "gemini"
    assert "model" not in body
    assert body["credential_configured"] is True


def test_health_without_credential(make_client):
    """Sans clé, l'API reste disponible mais le signale, sans jamais exposer de valeur."""
    r = make_client(FakeGeminiServer(), api_key=None).get("/health")
    assert r.status_code == HTTP_OK
    assert r.json()["credential_configured"] is False


def test_health_reports_fake_provider():
    """Le fournisseur affiché est celui des settings, pas le modèle."""
    llm = FakeDeterministicLLM()
    container = Container(settings=make_settings(LLM_PROVIDER="fake"), llm=llm)
    r = TestClient(create_app(container)).get("/health")
    assert r.json()["llm_provider"] == "fake"
