"""
Script de lancement du serveur.

Lance l'application avec uvicorn. `--fake-llm` remplace le client Gemini par le LLM déterministe,
pour le développement local sans clé d'API ni réseau.
"""

import argparse

import uvicorn

from reading_proxy.app.main import create_app
from reading_proxy.core.container import Container
from reading_proxy.core.settings import get_settings
from reading_proxy.infra.llm.fake_deterministic import FakeDeterministicLLM


def main() -> None:
    """
    Point d'entrée principal du serveur.

    Lit les settings, construit le conteneur (LLM factice si demandé) et démarre uvicorn.
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the reading proxy server")
    parser.add_argument("--host", default=settings.APP_HOST)
    parser.add_argument("--port", type=int, default=settings.APP_PORT)
    parser.add_argument("--fake-llm", action="store_true", help="use the deterministic offline LLM")
    args = parser.parse_args()

    llm = FakeDeterministicLLM() if args.fake_llm else None
    app = create_app(Container(settings=settings, llm=llm))
    uvicorn.run(app, host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
