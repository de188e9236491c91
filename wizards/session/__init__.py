"""
Session Module - Parses scripts and drives simulation runs.

A run is one play-through of a script:
- The roster is loaded into a fresh registry
- Actions are applied in order
- The verdict is reported
- The registry is released

Runs are independent: nothing carries over between them.
"""

from .script import (
    ActionLine,
    PlayerEntry,
    Roster,
    Script,
    SimulationLimits,
    parse_action_line,
    parse_script,
)
from .simulation import (
    INVALID_INPUT_MESSAGE,
    PlayerSnapshot,
    RunState,
    Simulation,
    SimulationResult,
    check_script,
    run_script,
)

__all__ = [
    "ActionLine",
    "PlayerEntry",
    "Roster",
    "Script",
    "SimulationLimits",
    "parse_action_line",
    "parse_script",
    "INVALID_INPUT_MESSAGE",
    "PlayerSnapshot",
    "RunState",
    "Simulation",
    "SimulationResult",
    "check_script",
    "run_script",
]
