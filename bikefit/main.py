"""FastAPI app entry point for the BikeFit cockpit API."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from bikefit import __version__
from bikefit.api.deps import limiter
from bikefit.api.routes import router
from bikefit.config import get_settings, validate_settings
from bikefit.core.logging import log_error, log_request, log_response, setup_logging

settings = get_settings()
logger = setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup / shutdown."""
    validate_settings(settings)
    logger.info(f"STARTUP {settings.app_name} version={__version__}")
    yield
    logger.info(f"SHUTDOWN {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="Stem, spacer and bar reach recommendations with cockpit geometry projection",
    version=__version__,
    lifespan=lifespan,
)

# Per-route limits are declared with @limiter.limit in bikefit.api.routes
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    log_error("rate limit exceeded", client=get_remote_address(request), limit=exc.detail)
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Try again later."},
    )


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    start = time.perf_counter()
    log_request(request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception as e:
        log_error("unhandled request failure", e, path=request.url.path)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    log_response(request.method, request.url.path, response.status_code, duration_ms)
    return response


# Routes
app.include_router(router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "bikefit-cockpit"}
