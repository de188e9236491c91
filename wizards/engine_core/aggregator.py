"""
Team Aggregator - Reduces the registry into team powers and a verdict.

Teams are not stored anywhere; they are recomputed from a full
traversal of the registry each time a verdict is needed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence

from .registry import PlayerRegistry


TIE_MESSAGE = "It's a tie"
WINNER_MESSAGE = "The chosen wizard is {wizard}"


@dataclass
class Team:
    """A team and the accumulated power of its members."""
    number: int
    power: int = 0


@dataclass
class Verdict:
    """
    Outcome of a game.

    Exactly one of winner / is_tie is meaningful: a tie names no winner.
    teams is the ranking (strongest first); empty when there is a
    single team and no aggregation was needed.
    """
    winner: int | None
    is_tie: bool = False
    teams: list[Team] = field(default_factory=list)

    def describe(self, wizard_names: Sequence[str]) -> str:
        """Format the verdict line using the wizard heading each team."""
        if self.is_tie or self.winner is None:
            return TIE_MESSAGE
        return WINNER_MESSAGE.format(wizard=wizard_names[self.winner])


def collect_team_power(registry: PlayerRegistry, team_count: int) -> list[Team]:
    """Accumulate power per team, in team index order."""
    teams = [Team(number=i) for i in range(team_count)]
    registry.collect_power(teams)
    return teams


def rank_teams(teams: Sequence[Team]) -> list[Team]:
    """Order teams by power, strongest first. Equal powers keep index order."""
    return sorted(teams, key=lambda team: team.power, reverse=True)


def decide(registry: PlayerRegistry, team_count: int) -> Verdict:
    """
    Decide the game.

    A single team wins without aggregation. Otherwise the strongest team
    wins, unless the top two teams have equal power (a tie).
    """
    if team_count < 1:
        raise ValueError(f"team_count must be >= 1, got {team_count}")

    if team_count == 1:
        return Verdict(winner=0)

    ranking = rank_teams(collect_team_power(registry, team_count))
    if ranking[0].power == ranking[1].power:
        return Verdict(winner=None, is_tie=True, teams=ranking)

    return Verdict(winner=ranking[0].number, teams=ranking)
