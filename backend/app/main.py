"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import FastAPI, Request

from app.api.routes import dashboard, performance
from app.core.config import settings
from app.core.logging import configure_logging
from app.observability.client import init_opik

configure_logging(log_level=settings.log_level)
init_opik()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}


app.include_router(performance.router)
app.include_router(dashboard.router)

logger.info("%s initialized (timezone=%s)", settings.app_name, settings.local_timezone)


def run() -> None:
    """Serve the API with uvicorn (console entrypoint)."""
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
