"""
Main application module for the path editor backend.

This file sets up the FastAPI application, configures CORS so the
editor canvas can make cross-origin requests, and exposes a simple
health check endpoint.  The edge hit-testing and selection routes are
included under the `/api` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_edges import router as edges_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="pathedit")

    # Allow all origins by default.  In production you should restrict
    # this to the domains that host the editor.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(edges_router, prefix="/api", tags=["edges"])

    return app


# Uvicorn imports this when running `uvicorn pathedit.main:app` from
# within backend/
app = create_app()
