"""
Routes de génération de lectures.

Un seul handler, monté sur `/api/readings/generate` et sur l'ancien chemin de fonction serverless
`/.netlify/functions/generateReading` utilisé par l'application cliente.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request

from reading_proxy.api.schemas import ErrorResponse, ReadingResponse
from reading_proxy.core.http_constants import REJECTED_METHODS
from reading_proxy.domain.errors import (
    InvalidMethodOrBody,
    ReadingError,
    UnexpectedInternalError,
)
from reading_proxy.domain.services import ReadingService, parse_reading_body

log = structlog.get_logger(__name__)

router = APIRouter(tags=["readings"])

READING_PATH = "/api/readings/generate"
LEGACY_READING_PATH = "/.netlify/functions/generateReading"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_reading_service(request: Request) -> ReadingService:
    """Service de lecture construit au démarrage et porté par `app.state.container`."""
    return request.app.state.container.reading_service


reading_service_dep = Depends(get_reading_service)


async def generate_reading(request: Request, service: ReadingService = reading_service_dep):
    """
    Génère une lecture astrologique ou numérologique.

    Étapes (la première en échec termine la requête):
    - clé d'API configurée (500)
    - méthode POST et corps non vide (400)
    - corps JSON valide (400)
    - `readingType` et champs requis du type (400)
    - appel unique au modèle, statut amont relayé en cas d'échec

    Retour: `ReadingResponse` (texte et sources).
    """
    service.ensure_configured()
    if request.method != "POST":
        log.warning("invalid_method", method=request.method, path=request.url.path)
        raise InvalidMethodOrBody()
    body = await request.body()
    try:
        reading_request = parse_reading_body(body)
    except ReadingError as err:
        log.warning("invalid_body", code=err.code, error=err.message)
        raise
    try:
        reading = await service.generate(reading_request)
    except ReadingError:
        raise
    except Exception as exc:
        log.exception("proxy_error", exception_type=type(exc).__name__)
        raise UnexpectedInternalError() from exc
    return ReadingResponse(text=reading.text, sources=reading.sources)


for _path, _in_schema in ((READING_PATH, True), (LEGACY_READING_PATH, False)):
    router.add_api_route(
        _path,
        generate_reading,
        methods=["POST"],
        response_model=ReadingResponse,
        responses=_ERROR_RESPONSES,
        include_in_schema=_in_schema,
    )
    router.add_api_route(
        _path,
        generate_reading,
        methods=REJECTED_METHODS,
        include_in_schema=False,
    )
