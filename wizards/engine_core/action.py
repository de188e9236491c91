"""
Action System - Actions and their statuses.

An action is one line of the script after tokenizing:
a keyword and one or two player names. Applying it yields an
ActionStatus; only INPUT_ERROR aborts the run.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Action keywords as they appear in a script."""
    ATTACK = "attack"
    FLIP_VISIBILITY = "flip_visibility"
    HEAL = "heal"
    SUPER = "super"

    @property
    def arity(self) -> int:
        """Number of player names the action takes."""
        return 1 if self is ActionType.FLIP_VISIBILITY else 2

    @classmethod
    def from_keyword(cls, keyword: str) -> ActionType | None:
        """Look up an action by keyword, None if unknown."""
        try:
            return cls(keyword)
        except ValueError:
            return None


class ActionStatus(Enum):
    """Result of applying one action."""
    INPUT_ERROR = "input_error"
    PLAYER_INVISIBLE = "player_invisible"
    PLAYER_FROZEN = "player_frozen"
    WRONG_TEAM = "wrong_team"
    HEAL_SELF = "heal_self"
    SUPER_SELF = "super_self"
    OK = "ok"

    @property
    def message(self) -> str | None:
        """Report line for a recoverable rule violation, None otherwise."""
        return STATUS_MESSAGES.get(self)


STATUS_MESSAGES = {
    ActionStatus.PLAYER_INVISIBLE: "This player can't play",
    ActionStatus.PLAYER_FROZEN: "This player is frozen",
    ActionStatus.WRONG_TEAM: "Both players should be from the same team",
    ActionStatus.HEAL_SELF: "The player cannot heal itself",
    ActionStatus.SUPER_SELF: "The player cannot do super action with itself",
}


@dataclass(frozen=True)
class Action:
    """
    A parsed action: what to do and to whom.

    names holds the player names in script order; the first one is
    the initiator.
    """
    action_type: ActionType
    names: tuple[str, ...]

    @classmethod
    def attack(cls, attacker: str, target: str) -> Action:
        """Factory for attack action."""
        return cls(ActionType.ATTACK, (attacker, target))

    @classmethod
    def flip_visibility(cls, name: str) -> Action:
        """Factory for flip_visibility action."""
        return cls(ActionType.FLIP_VISIBILITY, (name,))

    @classmethod
    def heal(cls, healer: str, target: str) -> Action:
        """Factory for heal action."""
        return cls(ActionType.HEAL, (healer, target))

    @classmethod
    def super_merge(cls, first: str, second: str) -> Action:
        """Factory for super action."""
        return cls(ActionType.SUPER, (first, second))

    def __str__(self) -> str:
        return " ".join((self.action_type.value, *self.names))
