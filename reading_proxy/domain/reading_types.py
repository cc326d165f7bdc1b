"""Résolution du type de lecture et champs requis par type.

Le discriminant `readingType` et la présence de certains champs facultatifs désignent exactement un
`ReadingKind`. La résolution suit un ordre de priorité fixe (premier prédicat vrai) ; chaque type
déclare ses champs requis et s'il porte les données de thème.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from reading_proxy.domain.entities import ReadingRequest, is_filled
from reading_proxy.domain.errors import MissingRequiredField


class ReadingKind(str, Enum):
    """Variantes de lecture, une par gabarit de prompt."""

    MATCHING = "matching"
    HEALTH = "health"
    FOLLOW_UP = "follow_up"
    ANNUAL_FORECAST = "annual_forecast"
    DAILY_HOROSCOPE = "daily_horoscope"
    NUMEROLOGY = "numerology"
    NATAL = "natal"


@dataclass(frozen=True)
class Requirement:
    """Un ensemble de champs requis et le message 400 qui le nomme."""

    name: str
    check: Callable[[ReadingRequest], bool]
    message: str


PARTNER1_DETAILS = Requirement(
    name="birthDetailsPartner1",
    check=lambda r: r.birth_details_partner1 is not None and r.birth_details_partner1.is_complete(),
    message="Invalid request: Missing required birth details (dob, tob, city).",
)
PARTNER2_DETAILS = Requirement(
    name="birthDetailsPartner2",
    check=lambda r: r.birth_details_partner2 is not None and r.birth_details_partner2.is_complete(),
    message="Invalid request: Missing required birth details for Partner 2 for matching.",
)
ZODIAC_SIGN = Requirement(
    name="zodiacSign",
    check=lambda r: is_filled(r.zodiac_sign),
    message="Invalid request: Missing required zodiacSign for daily horoscope.",
)
NUMEROLOGY_DETAILS = Requirement(
    name="numerologyDetails",
    check=lambda r: r.numerology_details is not None and r.numerology_details.is_complete(),
    message="Invalid request: Missing required name and DOB for numerology.",
)

REQUIRED_FIELDS: dict[ReadingKind, tuple[Requirement, ...]] = {
    ReadingKind.MATCHING: (PARTNER1_DETAILS, PARTNER2_DETAILS),
    ReadingKind.HEALTH: (PARTNER1_DETAILS,),
    ReadingKind.FOLLOW_UP: (PARTNER1_DETAILS,),
    ReadingKind.ANNUAL_FORECAST: (PARTNER1_DETAILS,),
    ReadingKind.DAILY_HOROSCOPE: (ZODIAC_SIGN,),
    ReadingKind.NUMEROLOGY: (NUMEROLOGY_DETAILS,),
    ReadingKind.NATAL: (PARTNER1_DETAILS,),
}

# Types dont le prompt ne contient aucun bloc de données de thème
CHARTLESS_KINDS = frozenset({ReadingKind.DAILY_HOROSCOPE, ReadingKind.NUMEROLOGY})

# Ordre de priorité : le premier prédicat vrai l'emporte, les gabarits ne se combinent jamais.
_PRECEDENCE: tuple[tuple[ReadingKind, Callable[[ReadingRequest], bool]], ...] = (
    (ReadingKind.MATCHING, lambda r: r.reading_type == "matching"),
    (ReadingKind.HEALTH, lambda r: r.reading_type == "health"),
    (
        ReadingKind.FOLLOW_UP,
        lambda r: is_filled(r.previous_reading) and is_filled(r.user_query),
    ),
    (ReadingKind.ANNUAL_FORECAST, lambda r: is_filled(r.year_input)),
    (ReadingKind.DAILY_HOROSCOPE, lambda r: r.reading_type == "daily_horoscope"),
    (ReadingKind.NUMEROLOGY, lambda r: r.reading_type == "numerology"),
)

MISSING_READING_TYPE = "Invalid request: Missing required readingType."


def resolve_reading_kind(request: ReadingRequest) -> ReadingKind:
    """Retourne le type de lecture de la requête.

    Raises:
        MissingRequiredField: si `readingType` est absent.
    """
    if not is_filled(request.reading_type):
        raise MissingRequiredField(MISSING_READING_TYPE)
    for kind, predicate in _PRECEDENCE:
        if predicate(request):
            return kind
    return ReadingKind.NATAL


def ensure_required_fields(kind: ReadingKind, request: ReadingRequest) -> None:
    """Vérifie les champs requis du type, dans l'ordre déclaré.

    Raises:
        MissingRequiredField: au premier ensemble manquant, avec son message.
    """
    for requirement in REQUIRED_FIELDS[kind]:
        if not requirement.check(request):
            raise MissingRequiredField(requirement.message)


def uses_chart_data(kind: ReadingKind) -> bool:
    return kind not in CHARTLESS_KINDS
