"""
FastAPI Application - REST API for running game scripts.

Endpoints:
    GET    /api/v1/health      Service health
    POST   /api/v1/simulate    Run a script and return the report

Each request is one independent run; nothing is kept between requests.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import ErrorCode, ErrorResponse, HealthResponse, SimulateRequest, SimulateResponse
from .service import SimulationService
from .. import __version__
from ..session import SimulationLimits

# Environment configuration
WIZARDS_ENV = os.getenv("WIZARDS_ENV", "development")
WIZARDS_MAX_ACTIONS = int(os.getenv("WIZARDS_MAX_ACTIONS", "1000"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional SimulationService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Wizards Simulation API",
        description="""
Turn-based team power simulation.

Post a script (same format as `input.txt`) to `/api/v1/simulate`.
The response carries the report lines exactly as the CLI would write
them, plus the final state of every team and player.

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_SCRIPT` | Script is structurally invalid; report is `Invalid inputs` |
| `VALIDATION_ERROR` | Request body failed validation (HTTP 422) |
| `INTERNAL_ERROR` | Unexpected failure |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        debug=WIZARDS_ENV == "development",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or SimulationService(
        limits=SimulationLimits(max_actions=WIZARDS_MAX_ACTIONS)
    )

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message, error_code=error_code, details=details
            ).model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request body",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return api_service.health()

    @app.post(
        "/api/v1/simulate",
        response_model=SimulateResponse,
        responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Simulation"],
        summary="Run a game script",
    )
    async def simulate(body: SimulateRequest) -> Union[SimulateResponse, JSONResponse]:
        """
        Run a script and return the report.

        A structurally invalid script is not an HTTP error: the response has
        `success=false` and the report `["Invalid inputs"]`.
        """
        try:
            return api_service.simulate(body)
        except Exception as e:
            logger.exception("Simulation failed")
            return make_error_response(
                ErrorCode.INTERNAL_ERROR,
                f"Simulation failed: {str(e)}",
                status_code=500,
            )

    return app
