# Schémas Pydantic exposés par l'API (réponses).

from typing import Any

from pydantic import BaseModel, Field


class ReadingResponse(BaseModel):
    """Réponse d'une lecture générée.

    Champs:
    - text: str (prose générée par le modèle)
    - sources: list[dict] (attributions de grounding, éventuellement vide)
    """

    text: str
    sources: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Corps d'erreur commun à tous les statuts 4xx/5xx."""

    error: str


class HealthResponse(BaseModel):
    """Réponse de `/health`."""

    status: str
    llm_provider: str
    credential_configured: bool
