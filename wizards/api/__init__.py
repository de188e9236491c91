"""
API Module - HTTP interface.

Exposes the simulation via a REST API:
1. Clients post a script
2. The service runs it in a fresh simulation
3. The response carries the report and the final standings

No state is kept between requests.
"""

from .schemas import (
    # Requests
    SimulateRequest,
    # Responses
    SimulateResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    TeamInfo,
    ErrorCode,
    ActionStatusName,
)
from .service import SimulationService
from .app import create_app

__all__ = [
    # Requests
    "SimulateRequest",
    # Responses
    "SimulateResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "TeamInfo",
    "ErrorCode",
    "ActionStatusName",
    # Service
    "SimulationService",
    "create_app",
]
