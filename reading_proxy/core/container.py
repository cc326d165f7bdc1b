"""
Conteneur d'injection de dépendances.

Instancie une fois par processus les composants centraux (settings, client LLM, service de
lecture). La clé d'API est lue ici et transmise explicitement au client ; aucun autre module ne la
relit depuis l'environnement.
"""

from __future__ import annotations

from reading_proxy.core.settings import Settings, get_settings
from reading_proxy.domain.services import ReadingService
from reading_proxy.infra.llm.base import LLM
from reading_proxy.infra.llm.fake_deterministic import FakeDeterministicLLM
from reading_proxy.infra.llm.gemini_client import GeminiLLM


def build_llm(settings: Settings) -> LLM:
    """Construit le client LLM désigné par `LLM_PROVIDER`."""
    provider = (settings.LLM_PROVIDER or "gemini").strip().lower()
    if provider == "fake":
        return FakeDeterministicLLM()
    if provider != "gemini":
        raise RuntimeError(f"Unsupported LLM_PROVIDER: {settings.LLM_PROVIDER}")
    return GeminiLLM(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        api_base=settings.GEMINI_API_BASE,
        timeout=settings.GEMINI_TIMEOUT_S,
        search_grounding=settings.GEMINI_SEARCH_GROUNDING,
    )


class Container:
    """Dépendances du processus, construites une seule fois au démarrage."""

    def __init__(self, settings: Settings | None = None, llm: LLM | None = None):
        self.settings = settings or get_settings()
        self.llm = llm or build_llm(self.settings)
        self.reading_service = ReadingService(self.llm)
