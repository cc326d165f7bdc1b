"""
Tests pour la résolution des variables d'environnement.

Ce module teste le chargement des settings depuis un fichier .env personnalisé et la construction
du client LLM à partir de ces settings.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import pytest

from reading_proxy.core.container import Container, build_llm
from reading_proxy.infra.llm.fake_deterministic import FakeDeterministicLLM
from reading_proxy.infra.llm.gemini_client import GeminiLLM
from tests.fakes import make_settings

CUSTOM_TIMEOUT_S = 12.5


def test_settings_reads_env_file(tmp_path: Path, monkeypatch) -> None:
    """
    Teste que les settings lisent correctement les fichiers d'environnement.

    Vérifie que les variables définies dans un fichier .env désigné par ENV_FILE sont chargées.
    """
    env = tmp_path / ".env.custom"
    env.write_text(
        "GEMINI_API_KEY=from-file\nGEMINI_MODEL=gemini-custom\nGEMINI_TIMEOUT_S=12.5\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ENV_FILE", str(env))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.delenv("GEMINI_TIMEOUT_S", raising=False)

    # Reload settings module to pick up new ENV_FILE
    settings_mod = importlib.import_module("reading_proxy.core.settings")
    importlib.reload(settings_mod)

    s = settings_mod.get_settings()
    assert s.GEMINI_API_KEY == "from-file"
    assert s.GEMINI_MODEL == "gemini-custom"
    assert s.GEMINI_TIMEOUT_S == CUSTOM_TIMEOUT_S

    monkeypatch.delenv("ENV_FILE")
    importlib.reload(settings_mod)


def test_build_llm_gemini_gets_injected_key() -> None:
    """La clé des settings est transmise une fois au client Gemini."""
    llm = build_llm(make_settings(GEMINI_API_KEY="k", GEMINI_MODEL="gemini-x"))
    assert isinstance(llm, GeminiLLM)
    assert llm.api_key == "k"
    assert llm.model == "gemini-x"
    assert llm.configured


def test_build_llm_fake_provider() -> None:
    assert isinstance(build_llm(make_settings(LLM_PROVIDER="fake")), FakeDeterministicLLM)


def test_build_llm_unknown_provider() -> None:
    with pytest.raises(RuntimeError):
        build_llm(make_settings(LLM_PROVIDER="other"))


def test_container_wires_service_to_llm() -> None:
    llm = FakeDeterministicLLM()
    container = Container(settings=make_settings(), llm=llm)
    assert container.reading_service.llm is llm
