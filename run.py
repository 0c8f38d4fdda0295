"""Serve the BikeFit cockpit API with uvicorn."""

import os

import uvicorn

from bikefit.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "bikefit.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
        # Handlers hold no shared state, so WEB_CONCURRENCY workers are safe
        workers=int(os.environ.get("WEB_CONCURRENCY", 1)),
        log_level=settings.log_level.lower(),
    )
