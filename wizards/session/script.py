"""
Script - Parsing and validation of a game script.

Script layout (one item per line):
    N                      number of teams, 1..max_teams
    <wizard> x N           team heads, distinct valid names
    M                      number of players, N..max_players
    <name>                 \
    <team>                  | one block of four lines per player
    <power>                 |
    True|False             /
    <action> <name> [name] zero or more actions, at most max_actions

Everything here is structural: any problem raises ScriptError and the
whole run is invalid. Whether an action's names exist is decided
later, when the action is applied.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..errors import ScriptError
from ..engine_core.player import is_name_valid


@dataclass
class SimulationLimits:
    """
    Size limits for a run.

    Defaults match the classic game: up to 10 teams, 100 players and
    1000 actions.
    """
    max_actions: int = 1000
    max_teams: int = 10
    max_players: int = 100


@dataclass
class PlayerEntry:
    """Raw fields of one player block, not yet checked against the roster."""
    name: str
    team: int
    power: int
    visibility: str
    line_number: int


@dataclass
class Roster:
    """Teams, their wizards and the declared players."""
    team_count: int
    wizard_names: list[str]
    players: list[PlayerEntry] = field(default_factory=list)


@dataclass
class ActionLine:
    """One tokenized action line."""
    keyword: str
    names: tuple[str, ...]
    line_number: int

    def __str__(self) -> str:
        return " ".join((self.keyword, *self.names))


@dataclass
class Script:
    """A fully parsed script."""
    roster: Roster
    actions: list[ActionLine] = field(default_factory=list)


class _LineReader:
    """Sequential access to script lines with 1-based line numbers."""

    def __init__(self, text: str):
        lines = text.split("\n")
        # A single final newline terminates the last line
        if lines and lines[-1] == "":
            lines.pop()
        self._lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        self._index = 0

    @property
    def line_number(self) -> int:
        """Line number of the next line to be read."""
        return self._index + 1

    def has_more(self) -> bool:
        return self._index < len(self._lines)

    def remaining(self) -> int:
        return len(self._lines) - self._index

    def next_line(self, what: str) -> str:
        if not self.has_more():
            raise ScriptError(f"Unexpected end of script, expected {what}", self.line_number)
        line = self._lines[self._index]
        self._index += 1
        return line


def parse_number(line: str, line_number: int, what: str = "number") -> int:
    """Parse a line holding only a non-negative decimal number."""
    if not (line.isascii() and line.isdigit()):
        raise ScriptError(f"Expected {what}, got {line!r}", line_number)
    return int(line)


def parse_action_line(line: str, line_number: int) -> ActionLine:
    """
    Tokenize an action line.

    Tokens are separated by exactly one space, with nothing before the
    first or after the last. Keyword and name count are checked when the
    action is dispatched.
    """
    tokens = line.split(" ")
    if any(token == "" for token in tokens):
        raise ScriptError(f"Malformed action line {line!r}", line_number)
    return ActionLine(keyword=tokens[0], names=tuple(tokens[1:]), line_number=line_number)


def _parse_roster(reader: _LineReader, limits: SimulationLimits) -> Roster:
    team_line = reader.line_number
    team_count = parse_number(reader.next_line("number of teams"), team_line, "number of teams")
    if not 1 <= team_count <= limits.max_teams:
        raise ScriptError(
            f"Number of teams must be in [1, {limits.max_teams}], got {team_count}", team_line
        )

    wizard_names: list[str] = []
    for _ in range(team_count):
        line_number = reader.line_number
        name = reader.next_line("wizard name")
        if not is_name_valid(name):
            raise ScriptError(f"Invalid wizard name {name!r}", line_number)
        if name in wizard_names:
            raise ScriptError(f"Duplicate wizard name {name!r}", line_number)
        wizard_names.append(name)

    player_line = reader.line_number
    player_count = parse_number(
        reader.next_line("number of players"), player_line, "number of players"
    )
    if not team_count <= player_count <= limits.max_players:
        raise ScriptError(
            f"Number of players must be in [{team_count}, {limits.max_players}], "
            f"got {player_count}",
            player_line,
        )

    roster = Roster(team_count=team_count, wizard_names=wizard_names)
    for _ in range(player_count):
        line_number = reader.line_number
        name = reader.next_line("player name")
        if not is_name_valid(name):
            raise ScriptError(f"Invalid player name {name!r}", line_number)
        team = parse_number(reader.next_line("team index"), line_number + 1, "team index")
        power = parse_number(reader.next_line("power"), line_number + 2, "power")
        visibility = reader.next_line("visibility")
        roster.players.append(
            PlayerEntry(
                name=name,
                team=team,
                power=power,
                visibility=visibility,
                line_number=line_number,
            )
        )

    return roster


def parse_script(text: str, limits: SimulationLimits | None = None) -> Script:
    """
    Parse a complete script.

    Raises:
        ScriptError: If the script is structurally invalid or holds more
            than limits.max_actions action lines
    """
    limits = limits or SimulationLimits()
    reader = _LineReader(text)
    script = Script(roster=_parse_roster(reader, limits))

    while reader.has_more():
        line_number = reader.line_number
        if len(script.actions) >= limits.max_actions:
            raise ScriptError(
                f"More than {limits.max_actions} actions ({reader.remaining()} extra line(s))",
                line_number,
            )
        script.actions.append(parse_action_line(reader.next_line("action"), line_number))

    return script
