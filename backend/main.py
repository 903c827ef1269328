"""
Type Traits Explorer — FastAPI Backend
Evaluates C++ type-trait rules for a set of toggled attributes and renders
an example declaration. Also serves the built visualizer site.

Usage:
    python3 backend/main.py                       # config.toml in cwd, if any
    python3 backend/main.py --config my.toml
    python3 backend/main.py --port 9000
"""
from __future__ import annotations

import argparse
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import Settings, load_settings
from routers import traits

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="Type Traits Explorer API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origin,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=[],
        max_age=3600,
    )

    app.include_router(traits.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    # ── Serve the visualizer site (must be last) ───────────────────────────
    if settings.site_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.site_dir, html=True), name="site")
        logger.info("Serving site from %s", settings.site_dir)
    else:
        logger.warning("Site directory %s not found; serving API only", settings.site_dir)

    return app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Start the type traits server")
    parser.add_argument("--config", help="config file (default is config.toml)")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.config)
    if args.host:
        settings = settings.model_copy(update={"host": args.host})
    if args.port:
        settings = settings.model_copy(update={"port": args.port})

    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
