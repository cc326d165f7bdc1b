"""
Service métier de génération de lectures.

`ReadingService` enchaîne validation, choix du gabarit, appel unique au modèle et relais du
résultat. Il ne conserve aucun état entre deux appels.
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from pydantic import ValidationError

from reading_proxy.app.metrics import record_reading
from reading_proxy.domain.entities import GeneratedReading, ReadingRequest
from reading_proxy.domain.errors import (
    ConfigurationMissing,
    ErrorCodes,
    InvalidMethodOrBody,
    MalformedJSON,
    ReadingError,
)
from reading_proxy.domain.prompts import PromptPair, build_prompts
from reading_proxy.domain.reading_types import (
    ReadingKind,
    ensure_required_fields,
    resolve_reading_kind,
)
from reading_proxy.infra.llm.base import LLM

log = structlog.get_logger(__name__)


def parse_reading_body(raw: bytes | str | None) -> ReadingRequest:
    """Décode le corps brut d'une requête en `ReadingRequest`.

    Raises:
        InvalidMethodOrBody: corps vide, ou JSON qui n'a pas la forme d'une requête.
        MalformedJSON: corps qui n'est pas du JSON.
    """
    if raw is None or not raw.strip():
        raise InvalidMethodOrBody()
    try:
        data: Any = json.loads(raw)
    except ValueError as exc:
        raise MalformedJSON() from exc
    if not isinstance(data, dict):
        raise InvalidMethodOrBody("Invalid request body: expected a JSON object.")
    try:
        return ReadingRequest.model_validate(data)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise InvalidMethodOrBody(
            f"Invalid request body: malformed fields ({', '.join(fields)})."
        ) from exc


class ReadingService:
    """Service de lecture : une requête, un appel au modèle, une réponse."""

    def __init__(self, llm: LLM) -> None:
        """Initialise le service avec le client LLM injecté."""
        self.llm = llm

    def ensure_configured(self) -> None:
        """Vérifie que la clé d'API a été provisionnée.

        Raises:
            ConfigurationMissing: si le client LLM n'est pas configuré.
        """
        if not self.llm.configured:
            log.error("configuration_missing", setting="GEMINI_API_KEY")
            raise ConfigurationMissing()

    def prepare(self, request: ReadingRequest) -> tuple[ReadingKind, PromptPair]:
        """Résout le type, contrôle les champs requis et construit les prompts."""
        kind = resolve_reading_kind(request)
        ensure_required_fields(kind, request)
        return kind, build_prompts(kind, request)

    async def generate(self, request: ReadingRequest) -> GeneratedReading:
        """Produit la lecture demandée.

        Le type est résolu avant tout contrôle pour que métriques et journaux portent le type
        réellement demandé, y compris en cas de champ manquant.

        Raises:
            ReadingError: toute erreur de validation ou de génération, déjà journalisée.
        """
        self.ensure_configured()
        kind: ReadingKind | None = None
        try:
            kind = resolve_reading_kind(request)
            ensure_required_fields(kind, request)
            prompts = build_prompts(kind, request)
            log.info("reading_prompt_built", kind=kind.value, model=self.llm.model)
            reading = await self.llm.generate(prompts)
        except ReadingError as err:
            log.warning(
                "reading_failed",
                kind=kind.value if kind else None,
                code=err.code,
                status_code=err.status_code,
                error=err.message,
            )
            record_reading(kind.value if kind else None, err.code.lower())
            raise
        except Exception as exc:
            log.warning(
                "reading_failed",
                kind=kind.value if kind else None,
                code=ErrorCodes.INTERNAL_ERROR,
                exception_type=type(exc).__name__,
            )
            record_reading(kind.value if kind else None, ErrorCodes.INTERNAL_ERROR.lower())
            raise
        record_reading(kind.value, "ok")
        log.info("reading_generated", kind=kind.value, sources=len(reading.sources))
        return reading
