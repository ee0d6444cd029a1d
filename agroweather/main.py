"""FastAPI application setup for the farm weather service."""

from fastapi import FastAPI

from .api import router as api_router
from .config import settings
from agroutils.logging_utils import setup_logging

setup_logging(level=settings.log_level, service_name="agroweather")

app = FastAPI(title="Farm Weather Service")


@app.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
