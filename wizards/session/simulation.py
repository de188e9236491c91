"""
Simulation - Drives one complete game.

The run:
1. Build the registry from the roster (checked player construction)
2. Apply each action through the state machine
3. Collect a report line for every rule violation
4. Decide the verdict from the team powers
5. Tear the registry down

A structural error at any point aborts the run; its report is the
single line "Invalid inputs".
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging

from ..errors import ScriptError
from ..engine_core.action import ActionStatus
from ..engine_core.aggregator import Team, Verdict, collect_team_power, decide
from ..engine_core.player import create_player
from ..engine_core.registry import PlayerRegistry
from ..engine_core.state_machine import StateMachine, SuperNameCounter
from .script import ActionLine, Roster, Script, SimulationLimits, parse_script

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid inputs"


class RunState(Enum):
    """State of a simulation run."""
    CREATED = "created"
    RUNNING = "running"
    FINISHED = "finished"
    ABORTED = "aborted"


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only view of a player at the end of a run."""
    name: str
    team: int
    power: int
    visible: bool


@dataclass
class SimulationResult:
    """
    Outcome of a run.

    report holds the output lines: rule violation messages followed by
    the verdict, or just "Invalid inputs" when the run was aborted.
    """
    success: bool
    report: list[str] = field(default_factory=list)
    statuses: list[ActionStatus] = field(default_factory=list)
    verdict: Verdict | None = None
    wizard_names: list[str] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)
    players: list[PlayerSnapshot] = field(default_factory=list)
    error: str | None = None

    @property
    def actions_applied(self) -> int:
        return len(self.statuses)

    @property
    def winner_name(self) -> str | None:
        """Name of the winning wizard, None on a tie or an aborted run."""
        if self.verdict is None or self.verdict.is_tie or self.verdict.winner is None:
            return None
        return self.wizard_names[self.verdict.winner]

    def render(self) -> str:
        """Report as file contents, one line per entry."""
        return "".join(f"{line}\n" for line in self.report)

    @classmethod
    def invalid(cls, error: str, statuses: list[ActionStatus] | None = None) -> SimulationResult:
        """Create the result of an aborted run."""
        return cls(
            success=False,
            report=[INVALID_INPUT_MESSAGE],
            statuses=statuses or [],
            error=error,
        )


class Simulation:
    """
    One game run over a fresh registry.

    Usage:
        simulation = Simulation()
        result = simulation.run(parse_script(text))
        print(result.render())

    A Simulation owns its registry and super-name counter, so separate
    runs never share players or generated names.
    """

    def __init__(self, limits: SimulationLimits | None = None):
        self.limits = limits or SimulationLimits()
        self.registry = PlayerRegistry()
        self.counter = SuperNameCounter()
        self.machine = StateMachine(self.registry, self.counter)
        self.state = RunState.CREATED
        self.statuses: list[ActionStatus] = []
        self.messages: list[str] = []

    def setup(self, roster: Roster) -> None:
        """
        Create and register every player of the roster.

        Raises:
            ScriptError: On an invalid player or a duplicate name
        """
        for entry in roster.players:
            try:
                player = create_player(
                    entry.name,
                    entry.team,
                    entry.power,
                    entry.visibility,
                    roster.team_count,
                )
            except ScriptError as e:
                raise ScriptError(e.reason, entry.line_number) from e

            if not self.registry.insert(player):
                raise ScriptError(f"Duplicate player name {entry.name!r}", entry.line_number)

        logger.debug("Registry built: %d players, depth %d", len(self.registry), self.registry.depth())

    def step(self, line: ActionLine) -> ActionStatus:
        """
        Apply one action line.

        Rule violations are recorded as report messages.

        Raises:
            ScriptError: If the action is structurally invalid
        """
        status = self.machine.dispatch(line.keyword, line.names)
        if status is ActionStatus.INPUT_ERROR:
            raise ScriptError(f"Invalid action {str(line)!r}", line.line_number)

        self.statuses.append(status)
        if status.message:
            self.messages.append(status.message)
        return status

    def run(self, script: Script) -> SimulationResult:
        """Run the whole script and return the result. The registry is released afterwards."""
        if self.state is not RunState.CREATED:
            raise RuntimeError(f"Simulation already {self.state.value}")

        self.state = RunState.RUNNING
        roster = script.roster
        logger.info(
            "Starting run: %d team(s), %d player(s), %d action(s)",
            roster.team_count, len(roster.players), len(script.actions),
        )

        try:
            self.setup(roster)
            for line in script.actions[:self.limits.max_actions]:
                self.step(line)
            if len(script.actions) > self.limits.max_actions:
                raise ScriptError(f"More than {self.limits.max_actions} actions")

            verdict = decide(self.registry, roster.team_count)
            result = SimulationResult(
                success=True,
                report=self.messages + [verdict.describe(roster.wizard_names)],
                statuses=list(self.statuses),
                verdict=verdict,
                wizard_names=list(roster.wizard_names),
                teams=collect_team_power(self.registry, roster.team_count),
                players=[
                    PlayerSnapshot(p.name, p.team, p.power, p.visible)
                    for p in self.registry
                ],
            )
            self.state = RunState.FINISHED
            logger.info("Run finished: %s", result.report[-1])
            return result

        except ScriptError as e:
            self.state = RunState.ABORTED
            logger.warning("Run aborted: %s", e)
            return SimulationResult.invalid(str(e), list(self.statuses))

        finally:
            self.registry.clear()


def check_script(text: str, limits: SimulationLimits | None = None) -> Script:
    """
    Parse a script and build its roster without running any action.

    Raises:
        ScriptError: On anything that would make a run report "Invalid inputs"
            before its first action
    """
    limits = limits or SimulationLimits()
    script = parse_script(text, limits)
    simulation = Simulation(limits)
    try:
        simulation.setup(script.roster)
    finally:
        simulation.registry.clear()
    return script


def run_script(text: str, limits: SimulationLimits | None = None) -> SimulationResult:
    """
    Parse and run a script in one go.

    Parse errors produce the same invalid result as errors during the run.
    """
    limits = limits or SimulationLimits()
    try:
        script = parse_script(text, limits)
    except ScriptError as e:
        logger.warning("Script rejected: %s", e)
        return SimulationResult.invalid(str(e))

    return Simulation(limits).run(script)
