"""
Fakes pour les tests unitaires.

Ce module fournit un faux serveur Gemini branché sur `httpx.MockTransport` : il enregistre chaque
requête reçue et renvoie la réponse préparée par le test.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from reading_proxy.core.settings import Settings
from reading_proxy.infra.llm.gemini_client import GeminiLLM

TEST_API_KEY = "test-key-123"

PARTNER_1 = {"name": "Asha", "dob": "1990-04-12", "tob": "06:45", "city": "Pune"}
PARTNER_2 = {"name": "Ravi", "dob": "1988-11-02", "tob": "21:10", "city": "Jaipur"}


def gemini_success(text: str | None = "Your chart shows...", sources: list | None = None) -> dict:
    """Construit une réponse `generateContent` réussie avec un candidat."""
    candidate: dict[str, Any] = {"content": {"parts": [{"text": text}], "role": "model"}}
    if sources is not None:
        candidate["groundingMetadata"] = {"groundingAttributions": sources}
    return {"candidates": [candidate]}


class FakeGeminiServer:
    """
    Faux endpoint Gemini.

    Renvoie `status_code` et `body` (dict sérialisé en JSON, ou texte brut) ; peut aussi lever une
    exception réseau via `error`.
    """

    def __init__(
        self,
        body: dict | str | None = None,
        status_code: int = 200,
        error: Exception | None = None,
    ) -> None:
        self.body = gemini_success() if body is None else body
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def llm(self, api_key: str | None = TEST_API_KEY, **kwargs: Any) -> GeminiLLM:
        return GeminiLLM(api_key=api_key, transport=self.transport(), **kwargs)


def make_settings(**overrides: Any) -> Settings:
    """Settings de test, indépendants de tout fichier .env local."""
    values: dict[str, Any] = {"GEMINI_API_KEY": TEST_API_KEY, "LOG_LEVEL": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)
