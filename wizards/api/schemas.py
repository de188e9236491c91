"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between API clients and the engine.

Error Codes:
- INVALID_SCRIPT: Script is structurally invalid (the run reports "Invalid inputs")
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected failure while running the script
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_SCRIPT = "INVALID_SCRIPT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ActionStatusName(str, Enum):
    """Per-action status as reported to clients."""
    PLAYER_INVISIBLE = "player_invisible"
    PLAYER_FROZEN = "player_frozen"
    WRONG_TEAM = "wrong_team"
    HEAL_SELF = "heal_self"
    SUPER_SELF = "super_self"
    OK = "ok"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """A player as it stands after the last action."""
    name: str
    team: int
    power: int = Field(ge=0, le=1000)
    visible: bool

    model_config = {"from_attributes": True}


class TeamInfo(BaseModel):
    """A team, its wizard and accumulated power."""
    number: int
    wizard: str
    power: int


# =============================================================================
# Request Models
# =============================================================================

class SimulateRequest(BaseModel):
    """Request to run a script."""
    script: str = Field(description="Full script text, same format as input.txt")
    max_actions: Optional[int] = Field(
        None, ge=0, description="Override the action limit (default from server config)"
    )


# =============================================================================
# Response Models
# =============================================================================

class SimulateResponse(BaseModel):
    """Result of running a script."""
    success: bool
    report: list[str] = Field(
        default_factory=list, description="Output lines, exactly as written to output.txt"
    )
    verdict: Optional[str] = Field(None, description="Last report line of a valid run")
    winner: Optional[str] = Field(None, description="Winning wizard, None on a tie")
    is_tie: bool = False
    statuses: list[ActionStatusName] = Field(default_factory=list)
    actions_applied: int = 0
    teams: list[TeamInfo] = Field(default_factory=list)
    players: list[PlayerInfo] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Why the script was rejected")
    error_code: Optional[ErrorCode] = None

    api_version: str = "v1"


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
