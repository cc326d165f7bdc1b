"""Gabarits de prompts par type de lecture.

Chaque gabarit produit une paire (instruction système, instruction utilisateur). Le prompt
utilisateur reçoit ensuite le bloc de données de thème du partenaire 1 (et du partenaire 2 pour la
compatibilité), sauf pour les types qui n'en ont pas besoin.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from reading_proxy.domain.entities import BirthDetails, ReadingRequest, is_filled
from reading_proxy.domain.reading_types import ReadingKind, uses_chart_data

NOT_AVAILABLE = "N/A"

FORMATTING_RULE = (
    "Do not use Markdown, headers, lists, or asterisks for bolding. "
    "Respond in plain, natural language paragraphs, separated by a single newline."
)

KOOTAS = ("Varna", "Vasya", "Tara", "Yoni", "Graha Maitri", "Gana", "Bhakoot", "Nadi")
MAX_GUNA_SCORE = 36


@dataclass(frozen=True)
class PromptPair:
    """Instruction système et instruction utilisateur envoyées au modèle."""

    system: str
    user: str


def _or_na(value: str | None) -> str:
    return value if is_filled(value) else NOT_AVAILABLE


def format_chart_block(details: BirthDetails, partner: int) -> str:
    """Formate le bloc de données de thème d'un partenaire."""
    label = f"PARTNER {partner}"
    return (
        f"\n--- CHART DATA ({label}) ---\n"
        f"Name: {_or_na(details.name)}\n"
        f"DOB: {details.dob}\n"
        f"TOB: {details.tob}\n"
        f"City: {details.city}\n"
        f"--- END CHART DATA ({label}) ---"
    )


def _matching(request: ReadingRequest) -> PromptPair:
    kootas = ", ".join(KOOTAS)
    return PromptPair(
        system=(
            "You are an expert Vedic astrologer specializing in Kundali Matching (Ashtakoot Milan). "
            "Analyze the birth charts of both individuals. "
            f"Provide a compatibility score (Guna Milan) out of {MAX_GUNA_SCORE}. "
            f"Then, provide a detailed paragraph for each of the {len(KOOTAS)} Kootas ({kootas}). "
            "Finally, give a concluding summary of the match, highlighting strengths, weaknesses, "
            "and a final verdict (e.g., Excellent, Good, Average, Challenging)."
        ),
        user="Generate a full Kundali matching report for Partner 1 and Partner 2 based on their chart data.",
    )


def _health(request: ReadingRequest) -> PromptPair:
    return PromptPair(
        system=(
            "You are a professional medical astrologer. Analyze the provided birth chart data. "
            "Focus your response on the native's innate vitality, potential physical strengths and "
            "imbalances (especially those related to the 6th house, Sun, and Moon placements), and "
            "suggest holistic well-being practices. Be encouraging and focus on preventative care."
        ),
        user=(
            "Generate a comprehensive health profile based on this data. "
            f"Specific health inquiry: {_or_na(request.user_query)}."
        ),
    )


def _follow_up(request: ReadingRequest) -> PromptPair:
    return PromptPair(
        system=(
            "You are a highly contextual astrology consultant. The user has provided their original "
            "chart data, the full previous reading, and a new follow-up question. Use the full "
            "context to provide a focused and detailed answer to their follow-up question. "
            "Do not repeat the previous reading content."
        ),
        user=(
            f'Based on the following previous reading: "{request.previous_reading}", and the '
            f'user\'s natal chart, answer this follow-up question: "{request.user_query}".'
        ),
    )


def _annual_forecast(request: ReadingRequest) -> PromptPair:
    year = request.year_input
    return PromptPair(
        system=(
            "You are an expert annual forecaster specializing in Solar Return charts and major "
            f"transits. Analyze the natal chart for the year {year}. Focus on major themes, areas "
            "of opportunity (Jupiter/Venus transits), and areas requiring caution (Saturn/Mars "
            "transits) for the native during that period."
        ),
        user=f"Generate the annual forecast for the year {year} based on the chart data.",
    )


def _daily_horoscope(request: ReadingRequest) -> PromptPair:
    return PromptPair(
        system=(
            "You are a concise and insightful astrologer. Provide a 3-paragraph daily horoscope "
            "for the given Sun Sign for today. Focus on love, career, and health."
        ),
        user=f"Generate today's daily horoscope for {request.zodiac_sign}.",
    )


def _numerology(request: ReadingRequest) -> PromptPair:
    details = request.numerology_details
    return PromptPair(
        system=(
            "You are an expert numerologist. Analyze the user's full name and date of birth. "
            "Calculate and provide a detailed explanation for their:\n"
            "1.  Life Path Number (from DOB)\n"
            "2.  Destiny (or Expression) Number (from full name)\n"
            "3.  Soul Urge (or Heart's Desire) Number (from vowels in name)\n"
            "Provide a final summary paragraph."
        ),
        user=(
            "Generate a full numerology report for:\n"
            f"Full Name: {details.name}\n"
            f"Date of Birth: {details.dob}"
        ),
    )


def _natal(request: ReadingRequest) -> PromptPair:
    return PromptPair(
        system=(
            "You are a world-class, insightful astrologer. Generate a comprehensive Natal Chart "
            "Overview, covering the native's sun, moon, and rising sign, along with key planetary "
            "aspects that define their personality, career approach, and emotional nature. "
            "Keep the tone warm and empowering."
        ),
        user=(
            "Generate the full natal chart reading. "
            f"Specific focus if any: {_or_na(request.user_query)}."
        ),
    )


TEMPLATES: dict[ReadingKind, Callable[[ReadingRequest], PromptPair]] = {
    ReadingKind.MATCHING: _matching,
    ReadingKind.HEALTH: _health,
    ReadingKind.FOLLOW_UP: _follow_up,
    ReadingKind.ANNUAL_FORECAST: _annual_forecast,
    ReadingKind.DAILY_HOROSCOPE: _daily_horoscope,
    ReadingKind.NUMEROLOGY: _numerology,
    ReadingKind.NATAL: _natal,
}


def build_prompts(kind: ReadingKind, request: ReadingRequest) -> PromptPair:
    """Construit la paire de prompts du type de lecture, bloc(s) de thème inclus.

    Suppose que `ensure_required_fields` a déjà été appelé pour ce type.
    """
    base = TEMPLATES[kind](request)
    user = base.user
    if uses_chart_data(kind):
        user += format_chart_block(request.birth_details_partner1, 1)
        if kind is ReadingKind.MATCHING:
            user += format_chart_block(request.birth_details_partner2, 2)
    return PromptPair(system=f"{base.system} {FORMATTING_RULE}", user=user)
