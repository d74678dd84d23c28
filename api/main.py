"""FastAPI application for the Scorecard Scraper API."""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(
        title="Scorecard Scraper API",
        version="1.0.0",
    )

    origins = os.environ.get("CORS_ORIGINS", "http://localhost:8081")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import scrape
    app.include_router(scrape.router, prefix="/api/golf", tags=["golf"])

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
