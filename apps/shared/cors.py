"""Sentralisert CORS-konfigurasjon for blogg-tjenesten."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.shared.config import ENVIRONMENT, FRONTEND_URL

# Development origins (kun i dev-miljø)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


def get_allowed_origins(environment: str = ENVIRONMENT, frontend_url: str = FRONTEND_URL) -> list[str]:
    """Hent liste over tillatte CORS origins basert på miljø."""
    origins = []

    # Legg til FRONTEND_URL fra env hvis satt
    if frontend_url:
        origins.append(frontend_url.rstrip("/"))

    if environment != "production":
        origins.extend(origin for origin in DEV_ORIGINS if origin not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Legg til CORS-middleware på en FastAPI-app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
        expose_headers=["Location"],
    )
