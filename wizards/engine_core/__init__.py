"""
Engine Core - Player registry, action state machine and team aggregation.

The engine is the runtime that:
1. Holds every player in a name-ordered registry
2. Applies actions via the state machine
3. Reduces the registry into team powers and a verdict
"""

from .player import Player, MAX_POWER, create_player, is_name_valid
from .registry import PlayerRegistry
from .action import Action, ActionType, ActionStatus, STATUS_MESSAGES
from .state_machine import StateMachine, SuperNameCounter, apply_action
from .aggregator import Team, Verdict, collect_team_power, rank_teams, decide

__all__ = [
    "Player",
    "MAX_POWER",
    "create_player",
    "is_name_valid",
    "PlayerRegistry",
    "Action",
    "ActionType",
    "ActionStatus",
    "STATUS_MESSAGES",
    "StateMachine",
    "SuperNameCounter",
    "apply_action",
    "Team",
    "Verdict",
    "collect_team_power",
    "rank_teams",
    "decide",
]
