"""LLM déterministe (sans réseau) pour le développement local et les tests de fumée."""

from __future__ import annotations

from collections import deque

from reading_proxy.domain.entities import GeneratedReading
from reading_proxy.domain.prompts import PromptPair
from reading_proxy.infra.llm.base import LLM

DEFAULT_HISTORY = 50


class FakeDeterministicLLM(LLM):
    """Renvoie une lecture stable dérivée du prompt utilisateur, sans sources.

    Seules les `history` dernières paires de prompts sont conservées dans `calls`.
    """

    model = "fake-deterministic"

    def __init__(self, history: int = DEFAULT_HISTORY) -> None:
        self.calls: deque[PromptPair] = deque(maxlen=history)

    async def generate(self, prompts: PromptPair) -> GeneratedReading:
        self.calls.append(prompts)
        first_line = prompts.user.splitlines()[0] if prompts.user else ""
        return GeneratedReading(text=f"FAKE_READING: {first_line[:80]}".strip(), sources=[])
