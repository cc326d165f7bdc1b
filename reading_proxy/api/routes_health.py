"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health` pour signaler l'état général de l'application, le fournisseur LLM actif et la
présence de la clé d'API (jamais sa valeur).
"""


from fastapi import APIRouter, Request

from reading_proxy.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    """Vérifie la disponibilité de l'API et la configuration du client LLM."""
    container = request.app.state.container
    return {
        "status": "ok",
        "llm_provider": container.settings.LLM_PROVIDER,
        "credential_configured": bool(container.llm.configured),
    }
