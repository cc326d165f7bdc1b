"""Erreurs du domaine de lecture.

Chaque erreur porte le statut HTTP, un code stable et le message renvoyé tel quel au client dans
`{"error": message}`. Aucune n'est rejouée : elles terminent la requête.
"""

from __future__ import annotations

from reading_proxy.core.http_constants import HTTP_BAD_REQUEST, HTTP_INTERNAL_SERVER_ERROR


class ErrorCodes:
    """Codes d'erreur stables (journaux et métriques)."""

    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    INVALID_METHOD_OR_BODY = "INVALID_METHOD_OR_BODY"
    MALFORMED_JSON = "MALFORMED_JSON"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    UPSTREAM_REQUEST_FAILED = "UPSTREAM_REQUEST_FAILED"
    NO_CONTENT_GENERATED = "NO_CONTENT_GENERATED"
    SAFETY_BLOCKED = "SAFETY_BLOCKED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ReadingError(Exception):
    """Erreur de base : statut HTTP, code et message public."""

    status_code: int = HTTP_INTERNAL_SERVER_ERROR
    code: str = ErrorCodes.INTERNAL_ERROR
    default_message: str = "Internal server error during AI generation."

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationMissing(ReadingError):
    """La clé d'API n'a pas été provisionnée pour ce processus."""

    code = ErrorCodes.CONFIGURATION_MISSING
    default_message = (
        "Server configuration error: GEMINI_API_KEY is missing. "
        "Please set it as an environment variable."
    )


class InvalidMethodOrBody(ReadingError):
    status_code = HTTP_BAD_REQUEST
    code = ErrorCodes.INVALID_METHOD_OR_BODY
    default_message = "Invalid request method or missing body."


class MalformedJSON(ReadingError):
    status_code = HTTP_BAD_REQUEST
    code = ErrorCodes.MALFORMED_JSON
    default_message = "Invalid JSON body."


class MissingRequiredField(ReadingError):
    """Champ(s) requis absent(s) pour le type de lecture ; le message nomme l'ensemble manquant."""

    status_code = HTTP_BAD_REQUEST
    code = ErrorCodes.MISSING_REQUIRED_FIELD
    default_message = "Invalid request: Missing required fields."


class UpstreamRequestFailed(ReadingError):
    """Réponse non-2xx de l'API de génération ; le statut amont est conservé."""

    code = ErrorCodes.UPSTREAM_REQUEST_FAILED

    def __init__(self, status_code: int, body: str) -> None:
        self.upstream_body = body
        super().__init__(f"Gemini API Error: {body}", status_code=status_code)


class NoContentGenerated(ReadingError):
    code = ErrorCodes.NO_CONTENT_GENERATED
    default_message = "No content generated by the AI model."


class SafetyBlocked(NoContentGenerated):
    """Aucun texte parce que la génération a été bloquée par les filtres de sécurité."""

    code = ErrorCodes.SAFETY_BLOCKED
    default_message = "AI failed to generate content. This might be due to safety settings."

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__()


class UnexpectedInternalError(ReadingError):
    code = ErrorCodes.INTERNAL_ERROR
