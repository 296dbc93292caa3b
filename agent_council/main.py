"""FastAPI surface for Agent Council.

One shared CouncilService backs every request; its store serializes
mutations, so the app is safe to serve from a threaded worker pool.
"""

import logging
import uuid
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import CORS_ORIGINS, HOST, PORT
from .errors import NOT_FOUND_CODES
from .logging_config import set_correlation_id, setup_logging
from .models import ActionResult
from .service import CouncilService
from .telemetry import instrument_fastapi, setup_telemetry

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

app = FastAPI(title="Agent Council API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service = CouncilService()


def get_service() -> CouncilService:
    """Shared service instance (overridable in tests)."""
    return _service


class ActionRequest(BaseModel):
    """A council action plus its flat, camelCase parameters."""

    model_config = ConfigDict(extra="allow")

    action: Any = Field(default=None, description="One of the seven council actions")


def _respond(outcome: ActionResult) -> JSONResponse:
    """Map an ActionResult to an HTTP response."""
    if outcome.success:
        status_code = 200
    elif outcome.error in NOT_FOUND_CODES:
        status_code = 404
    else:
        status_code = 400
    return JSONResponse(status_code=status_code, content=outcome.to_dict())


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    """Tag logs for this request with a correlation ID."""
    correlation_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    set_correlation_id(correlation_id)
    try:
        response = await call_next(request)
    finally:
        set_correlation_id(None)
    response.headers[REQUEST_ID_HEADER] = correlation_id
    return response


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "Agent Council API"}


@app.post("/api/council")
def run_action(request: ActionRequest, service: CouncilService = Depends(get_service)):
    """Run any council action.

    Body is the flat request, e.g.
    ``{"action": "vote", "councilId": "...", "proposal": "..."}``.
    """
    return _respond(service.execute(request.model_dump()))


@app.get("/api/councils")
def list_councils(service: CouncilService = Depends(get_service)):
    """List council summaries."""
    return _respond(service.list_councils())


@app.get("/api/councils/{council_id}")
def get_council(council_id: str, service: CouncilService = Depends(get_service)):
    """Get one council with its roster."""
    return _respond(service.get_council(council_id=council_id))


if __name__ == "__main__":
    import uvicorn

    setup_logging()
    setup_telemetry()
    instrument_fastapi(app)
    uvicorn.run(app, host=HOST, port=PORT)
