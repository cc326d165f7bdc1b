"""Tests pour les entités du domaine (schéma canonique de la requête)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from reading_proxy.domain.entities import GeneratedReading, ReadingRequest, is_filled
from tests.fakes import PARTNER_1


def test_camel_case_fields() -> None:
    """Les clés camelCase du client alimentent les champs du modèle."""
    req = ReadingRequest.model_validate(
        {
            "readingType": "health",
            "birthDetailsPartner1": PARTNER_1,
            "userQuery": "energy",
            "zodiacSign": "Leo",
            "numerologyDetails": {"name": "Asha", "dob": "1990-04-12"},
        }
    )
    assert req.reading_type == "health"
    assert req.birth_details_partner1.city == "Pune"
    assert req.user_query == "energy"
    assert req.zodiac_sign == "Leo"
    assert req.numerology_details.is_complete()


def test_legacy_birth_details_alias() -> None:
    """L'ancienne clé `birthDetails` est acceptée pour le partenaire 1."""
    req = ReadingRequest.model_validate({"readingType": "natal", "birthDetails": PARTNER_1})
    assert req.birth_details_partner1 is not None
    assert req.birth_details_partner1.is_complete()


def test_numeric_year_input() -> None:
    """Une année numérique est convertie en texte."""
    req = ReadingRequest.model_validate({"readingType": "natal", "yearInput": 2026})
    assert req.year_input == "2026"


def test_unknown_keys_ignored() -> None:
    req = ReadingRequest.model_validate({"readingType": "natal", "theme": "dark"})
    assert req.reading_type == "natal"


def test_wrong_shape_rejected() -> None:
    """Un bloc de naissance qui n'est pas un objet est invalide."""
    with pytest.raises(ValidationError):
        ReadingRequest.model_validate({"readingType": "natal", "birthDetailsPartner1": "Pune"})


@pytest.mark.parametrize(("value", "expected"), [(None, False), ("", False), ("  ", False), ("x", True)])
def test_is_filled(value, expected) -> None:
    assert is_filled(value) is expected


def test_generated_reading_defaults_to_no_sources() -> None:
    assert GeneratedReading(text="hello").sources == []
