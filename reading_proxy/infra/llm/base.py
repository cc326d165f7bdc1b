"""Interface de base pour les modèles de langage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from reading_proxy.domain.entities import GeneratedReading
from reading_proxy.domain.prompts import PromptPair


class LLM(ABC):
    """Interface abstraite pour les modèles de langage."""

    model: str = "unknown"

    @property
    def configured(self) -> bool:
        """Le client dispose de ce qu'il faut (clé d'API) pour appeler le modèle."""
        return True

    @abstractmethod
    async def generate(self, prompts: PromptPair) -> GeneratedReading:
        """Génère une lecture à partir d'une paire de prompts.

        Un seul appel, sans retry. Les échecs sont levés en `ReadingError`.
        """
        ...
