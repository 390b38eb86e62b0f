"""
FastAPI + Uvicorn ASGI application — registration parsing over HTTP.

Endpoints:
  - GET  /health  liveness probe
  - GET  /info    application metadata
  - POST /parse   parse a metadata envelope, return the result as JSON

Entry point: uvicorn catalyst_parser.asgi:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from catalyst_parser import __version__
from catalyst_parser.config import AppSettings
from catalyst_parser.main import configure_structlog, load_settings
from catalyst_parser.pipeline import parse_registration
from catalyst_parser.presentation import registration_to_dict
from catalyst_parser.railway import ErrorCode

log = structlog.get_logger()

_STATUS_BY_ERROR_CODE = {
    ErrorCode.INVALID_FORMAT: 400,
    ErrorCode.MALFORMED_HEX: 400,
    ErrorCode.VOTING_KEY_NOT_FOUND: 422,
    ErrorCode.PARSE_ERROR: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings and configure logging on startup."""
    settings_result = load_settings()
    if settings_result.is_failure():
        failure = settings_result.error()
        error_msg = f"{failure.message}: {failure.exception}"
        log.error("asgi.startup_error", error=error_msg)
        raise RuntimeError(error_msg) from failure.exception

    settings = settings_result.value()
    configure_structlog(settings.log_level)
    log.info("asgi.startup", version=__version__, log_level=settings.log_level)
    yield
    log.info("asgi.shutdown")


app = FastAPI(
    title="catalyst-parser",
    description="Cardano Project Catalyst voting registration metadata parser",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness probe — the service holds no state, so being up is enough."""
    return JSONResponse(status_code=200, content={"status": "healthy"})


@app.get("/info")
async def info() -> dict[str, Any]:
    return {"name": "catalyst-parser", "version": __version__}


@app.post("/parse")
async def parse(envelope: dict[str, Any] = Body(...)) -> JSONResponse:
    """
    Parse a registration envelope posted as a JSON object.

    Returns 200 with the result fields on success.
    Returns 400 for a missing key or malformed hex, 422 when the
    certificate cannot be parsed.
    """
    result = parse_registration(envelope)

    if result.is_success():
        return JSONResponse(status_code=200, content=registration_to_dict(result.value()))

    failure = result.error()
    log.info("parse.rejected", error_code=failure.code.value)
    return JSONResponse(
        status_code=_STATUS_BY_ERROR_CODE.get(failure.code, 500),
        content={
            "status": "failed",
            "error_code": failure.code.value,
            "message": failure.message,
        },
    )


if __name__ == "__main__":
    import uvicorn

    _settings = AppSettings()
    uvicorn.run(
        "catalyst_parser.asgi:app",
        host=_settings.api.host,
        port=_settings.api.port,
        reload=False,
        log_level=_settings.log_level.lower(),
    )
