"""
Client LLM basé sur l'API REST Gemini (`generateContent`).

Implémente l'interface LLM :
- un seul POST par lecture, clé passée en paramètre de requête `key`
- grounding Google Search activé par l'outil `google_search`
- statut amont non-2xx relayé tel quel (`UpstreamRequestFailed`)
- absence de texte distinguée entre blocage de sécurité et réponse vide
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from reading_proxy.app.metrics import UPSTREAM_LATENCY
from reading_proxy.domain.entities import GeneratedReading
from reading_proxy.domain.errors import (
    ConfigurationMissing,
    NoContentGenerated,
    SafetyBlocked,
    UpstreamRequestFailed,
)
from reading_proxy.domain.prompts import PromptPair
from reading_proxy.infra.llm.base import LLM

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"

# finishReason signalant une génération bloquée plutôt qu'une réponse vide
BLOCKING_FINISH_REASONS = frozenset(
    {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "RECITATION"}
)

log = structlog.get_logger(__name__)


class GeminiLLM(LLM):
    """
    LLM basé sur l'API Gemini via httpx.

    La clé est injectée à la construction (lue une fois par processus) ; un client sans clé reste
    constructible mais `configured` est faux et `generate` refuse d'appeler l'API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 60.0,
        search_grounding: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise le client Gemini.

        Args:
            api_key: Clé d'API Gemini (None si non provisionnée).
            model: Nom du modèle Gemini.
            api_base: URL de base de l'API (sans slash final).
            timeout: Timeout HTTP global en secondes.
            search_grounding: Active l'outil `google_search`.
            transport: Transport httpx alternatif (tests).
        """
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.search_grounding = search_grounding
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_payload(self, prompts: PromptPair) -> dict[str, Any]:
        """Construit le corps `generateContent` : contenu, outils, instruction système."""
        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompts.user}]}],
            "systemInstruction": {"parts": [{"text": prompts.system}]},
        }
        if self.search_grounding:
            payload["tools"] = [{"google_search": {}}]
        return payload

    async def generate(self, prompts: PromptPair) -> GeneratedReading:
        """Appelle `generateContent` une fois et extrait le texte du premier candidat.

        Raises:
            ConfigurationMissing: si aucune clé n'est configurée.
            UpstreamRequestFailed: statut amont non-2xx (statut et corps conservés).
            SafetyBlocked: pas de texte, génération bloquée.
            NoContentGenerated: pas de texte, sans motif de blocage.
            httpx.HTTPError: erreur réseau (traitée en 500 par l'appelant).
        """
        if not self.configured:
            raise ConfigurationMissing()

        start = time.perf_counter()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_payload(prompts),
                headers={"Content-Type": "application/json"},
            )
        UPSTREAM_LATENCY.labels(model=self.model).observe(time.perf_counter() - start)

        if not resp.is_success:
            body = resp.text
            log.error("gemini_api_error", status_code=resp.status_code, body=body)
            raise UpstreamRequestFailed(resp.status_code, body)

        return self.parse_response(resp.json())

    def parse_response(self, result: dict[str, Any]) -> GeneratedReading:
        """Extrait texte et attributions du premier candidat d'une réponse réussie."""
        candidates = result.get("candidates") or []
        candidate = candidates[0] if candidates else {}
        text = _first_part_text(candidate)

        if not text:
            block_reason = _block_reason(result, candidate)
            log.error(
                "gemini_no_text_generated",
                candidate=candidate or None,
                block_reason=block_reason,
            )
            if block_reason:
                raise SafetyBlocked(block_reason)
            raise NoContentGenerated()

        return GeneratedReading(text=text, sources=_grounding_sources(candidate))


def _first_part_text(candidate: dict[str, Any]) -> str | None:
    parts = (candidate.get("content") or {}).get("parts") or []
    if not parts:
        return None
    return parts[0].get("text")


def _block_reason(result: dict[str, Any], candidate: dict[str, Any]) -> str | None:
    prompt_block = (result.get("promptFeedback") or {}).get("blockReason")
    if prompt_block:
        return str(prompt_block)
    finish = candidate.get("finishReason")
    if finish in BLOCKING_FINISH_REASONS:
        return str(finish)
    return None


def _grounding_sources(candidate: dict[str, Any]) -> list[dict[str, Any]]:
    """Attributions de grounding, ou à défaut les `groundingChunks` des réponses récentes."""
    metadata = candidate.get("groundingMetadata") or {}
    sources = metadata.get("groundingAttributions") or metadata.get("groundingChunks") or []
    return [s for s in sources if isinstance(s, dict)]
