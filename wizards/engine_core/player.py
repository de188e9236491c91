"""
Player - The mutable record the simulation manipulates.

A player has:
- A unique name (the registry's sort key, never changes)
- Power in [0, MAX_POWER]; zero power means the player is frozen
- A team index in [0, number_of_teams)
- A visibility flag, toggled only by flip_visibility

Players are owned by the PlayerRegistry. Handlers mutate the live record
returned by a lookup; nothing keeps a player beyond a single action.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import PlayerConstructionError


MAX_POWER = 1000

# Canonical visibility tokens in a script
VISIBLE_TOKEN = "True"
INVISIBLE_TOKEN = "False"

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 20


def is_name_valid(name: str) -> bool:
    """
    Check a player or wizard name.

    Valid names are 2-20 ASCII letters, first uppercase, rest lowercase.
    """
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        return False
    if not (name.isascii() and name.isalpha()):
        return False
    return name[0].isupper() and name[1:].islower()


def parse_visibility(token: str) -> bool:
    """Parse a visibility token. Raises PlayerConstructionError on anything else."""
    if token == VISIBLE_TOKEN:
        return True
    if token == INVISIBLE_TOKEN:
        return False
    raise PlayerConstructionError(f"Invalid visibility token: {token!r}")


@dataclass(eq=False)
class Player:
    """
    A player in the roster.

    Equality is identity: two lookups refer to the same player only if
    they return the same record.
    """
    name: str
    team: int
    power: int
    visible: bool = True

    @property
    def is_frozen(self) -> bool:
        return self.power == 0

    def freeze(self) -> None:
        """Set power to zero."""
        self.power = 0

    def increase_power(self, amount: int) -> None:
        """Add power, capped at MAX_POWER."""
        self.power = min(self.power + amount, MAX_POWER)

    def flip_visibility(self) -> None:
        self.visible = not self.visible


def create_player(
    name: str,
    team: int,
    power: int,
    visibility: str,
    number_of_teams: int,
) -> Player:
    """
    Create a player with full field checks.

    Args:
        name: Player name (checked with is_name_valid)
        team: Team index in [0, number_of_teams)
        power: Power in [0, MAX_POWER]
        visibility: "True" or "False"
        number_of_teams: Number of teams in the game

    Returns:
        New Player instance

    Raises:
        PlayerConstructionError: If any field is out of range
    """
    if not is_name_valid(name):
        raise PlayerConstructionError(f"Invalid player name: {name!r}")

    if not 0 <= team < number_of_teams:
        raise PlayerConstructionError(
            f"Team {team} of player {name} is outside [0, {number_of_teams})"
        )

    if not 0 <= power <= MAX_POWER:
        raise PlayerConstructionError(
            f"Power {power} of player {name} is outside [0, {MAX_POWER}]"
        )

    return Player(
        name=name,
        team=team,
        power=power,
        visible=parse_visibility(visibility),
    )
