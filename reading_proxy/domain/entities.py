"""
Entités du domaine métier.

Ce module définit les modèles de données du proxy de lectures : la requête entrante telle que
l'envoie l'application cliente (clés camelCase) et la lecture générée renvoyée au client.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def is_filled(value: str | None) -> bool:
    """Indique si une valeur textuelle est renseignée (ni absente, ni vide, ni blanche)."""
    return value is not None and bool(str(value).strip())


class BirthDetails(BaseModel):
    """Données de naissance d'un partenaire (nom facultatif)."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    dob: str | None = None  # date de naissance
    tob: str | None = None  # heure de naissance
    city: str | None = None

    def is_complete(self) -> bool:
        """Date, heure et ville sont toutes renseignées."""
        return is_filled(self.dob) and is_filled(self.tob) and is_filled(self.city)


class NumerologyDetails(BaseModel):
    """Nom complet et date de naissance pour une lecture numérologique."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    dob: str | None = None

    def is_complete(self) -> bool:
        return is_filled(self.name) and is_filled(self.dob)


class ReadingRequest(BaseModel):
    """Requête de lecture reçue du client.

    `birthDetails` (ancien schéma à un seul thème) est accepté comme alias de
    `birthDetailsPartner1`.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    reading_type: str | None = Field(default=None, alias="readingType")
    birth_details_partner1: BirthDetails | None = Field(
        default=None,
        alias="birthDetailsPartner1",
        validation_alias=AliasChoices("birthDetailsPartner1", "birthDetails", "birth_details_partner1"),
    )
    birth_details_partner2: BirthDetails | None = Field(
        default=None,
        alias="birthDetailsPartner2",
        validation_alias=AliasChoices("birthDetailsPartner2", "birth_details_partner2"),
    )
    user_query: str | None = Field(default=None, alias="userQuery")
    year_input: str | None = Field(default=None, alias="yearInput")
    previous_reading: str | None = Field(default=None, alias="previousReading")
    zodiac_sign: str | None = Field(default=None, alias="zodiacSign")
    numerology_details: NumerologyDetails | None = Field(
        default=None, alias="numerologyDetails"
    )

    @field_validator("year_input", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        # Le client envoie l'année tantôt en nombre, tantôt en chaîne.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class GeneratedReading(BaseModel):
    """Lecture générée : texte du modèle et attributions de sources (éventuellement vides)."""

    text: str
    sources: list[dict[str, Any]] = Field(default_factory=list)
