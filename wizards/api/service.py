"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to simulation runs
2. Formats results for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    ActionStatusName,
    ErrorCode,
    HealthResponse,
    PlayerInfo,
    SimulateRequest,
    SimulateResponse,
    TeamInfo,
)
from .. import __version__
from ..session import SimulationLimits, SimulationResult, run_script

logger = logging.getLogger(__name__)


@dataclass
class SimulationService:
    """
    Main API service.

    Usage:
        service = SimulationService()
        response = service.simulate(SimulateRequest(script=text))
    """
    limits: SimulationLimits = field(default_factory=SimulationLimits)

    def health(self) -> HealthResponse:
        return HealthResponse(status="ok", service="wizards", version=__version__)

    def simulate(self, request: SimulateRequest) -> SimulateResponse:
        """Run the request's script and describe the outcome."""
        limits = self.limits
        if request.max_actions is not None:
            limits = SimulationLimits(
                max_actions=request.max_actions,
                max_teams=self.limits.max_teams,
                max_players=self.limits.max_players,
            )

        result = run_script(request.script, limits)
        return self._to_response(result)

    def _to_response(self, result: SimulationResult) -> SimulateResponse:
        if not result.success:
            return SimulateResponse(
                success=False,
                report=result.report,
                actions_applied=result.actions_applied,
                error=result.error,
                error_code=ErrorCode.INVALID_SCRIPT,
            )

        verdict = result.verdict
        return SimulateResponse(
            success=True,
            report=result.report,
            verdict=result.report[-1],
            winner=result.winner_name,
            is_tie=bool(verdict and verdict.is_tie),
            statuses=[ActionStatusName(status.value) for status in result.statuses],
            actions_applied=result.actions_applied,
            teams=[
                TeamInfo(
                    number=team.number,
                    wizard=result.wizard_names[team.number],
                    power=team.power,
                )
                for team in result.teams
            ],
            players=[PlayerInfo.model_validate(player) for player in result.players],
        )
