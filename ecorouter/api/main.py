"""FastAPI application for the quote router."""

import os

import uvicorn
from fastapi import FastAPI

from ecorouter import __version__
from ecorouter.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("ECOROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("ECOROUTER_PORT", "8000"))
DEBUG = os.environ.get("ECOROUTER_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="EcoRouter",
    description="Best-trade discovery across DEX liquidity sources",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - ECOROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - ECOROUTER_PORT: Port to bind to (default: 8000)
    - ECOROUTER_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "ecorouter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
