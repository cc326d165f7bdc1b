"""
Application principale FastAPI.

Ce module assemble les composants du proxy de lectures : middlewares, routes, métriques,
gestionnaires d'erreurs et conteneur de dépendances.

Responsabilités du module:
- Initialiser le logging structuré
- Construire le conteneur (settings, client LLM, service) une seule fois
- Ajouter les middlewares (request id, timing, métriques, CORS éventuel)
- Monter les routers (santé, lectures, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reading_proxy.api.errors import register_exception_handlers
from reading_proxy.api.routes_health import router as health_router
from reading_proxy.api.routes_readings import router as readings_router
from reading_proxy.app.metrics import PrometheusMiddleware, metrics_router
from reading_proxy.core.container import Container
from reading_proxy.core.logging import setup_logging
from reading_proxy.middlewares.request_id import RequestIDMiddleware
from reading_proxy.middlewares.timing import TimingMiddleware


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Lit les paramètres d'exécution (via le conteneur)
    - Configure le logging structuré (structlog)
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, de lecture et de métriques
    """
    container = container or Container()
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.state.container = container

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(o).rstrip("/") for o in settings.CORS_ORIGINS],
            allow_methods=["POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(TimingMiddleware)
    # Ajouté en dernier : le plus externe, l'identifiant couvre aussi les logs de timing
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(readings_router)
    app.include_router(metrics_router)
    return app


app = create_app()
