"""
State Machine - Applies actions to the player registry.

The state machine is the single point of player mutation during a run.
All action effects go through apply().

Design principles:
- Closed dispatch table: one handler per ActionType
- Checks before mutation: a handler either commits all of its effects
  and returns OK, or returns another status having changed nothing
- No hidden state: the super-player counter is owned by the caller
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Sequence
import logging

from ..errors import WizardsError
from .action import Action, ActionStatus, ActionType
from .player import MAX_POWER, Player
from .registry import PlayerRegistry

logger = logging.getLogger(__name__)

SUPER_NAME_PREFIX = "S_"


@dataclass
class SuperNameCounter:
    """
    Source of unique names for super players (S_0, S_1, ...).

    One counter per simulation run; it only moves forward.
    """
    next_index: int = 0

    def next_name(self) -> str:
        name = f"{SUPER_NAME_PREFIX}{self.next_index}"
        self.next_index += 1
        return name


@dataclass
class StateMachine:
    """
    Dispatches actions to their handlers.

    Usage:
        machine = StateMachine(registry)
        status = machine.apply(Action.attack("Harry", "Draco"))

        # From raw tokens; unknown keywords yield INPUT_ERROR
        status = machine.dispatch("heal", ["Harry", "Ron"])
    """
    registry: PlayerRegistry
    counter: SuperNameCounter = field(default_factory=SuperNameCounter)

    def dispatch(self, keyword: str, names: Sequence[str]) -> ActionStatus:
        """
        Apply an action given as a keyword and player names.

        Returns INPUT_ERROR for an unknown keyword or a wrong name count.
        """
        action_type = ActionType.from_keyword(keyword)
        if action_type is None:
            logger.debug("Unknown action keyword %r", keyword)
            return ActionStatus.INPUT_ERROR

        if len(names) != action_type.arity:
            logger.debug(
                "%s takes %d name(s), got %d", keyword, action_type.arity, len(names)
            )
            return ActionStatus.INPUT_ERROR

        return self.apply(Action(action_type, tuple(names)))

    def apply(self, action: Action) -> ActionStatus:
        """Apply a parsed action and return its status."""
        if len(action.names) != action.action_type.arity:
            return ActionStatus.INPUT_ERROR

        handler = self._get_handler(action.action_type)
        status = handler(*action.names)
        logger.debug("%s -> %s", action, status.name)
        return status

    def _get_handler(self, action_type: ActionType) -> Callable[..., ActionStatus]:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.ATTACK: self._handle_attack,
            ActionType.FLIP_VISIBILITY: self._handle_flip_visibility,
            ActionType.HEAL: self._handle_heal,
            ActionType.SUPER: self._handle_super,
        }
        return handlers[action_type]

    def _get_two_players(
        self, first: str, second: str
    ) -> tuple[Player, Player] | ActionStatus:
        """
        Resolve both names and check the initiator.

        Returns the two players, or the failing status:
        INPUT_ERROR if a name is unknown, PLAYER_INVISIBLE or
        PLAYER_FROZEN if the first player cannot act.
        """
        player1 = self.registry.find(first)
        if player1 is None:
            return ActionStatus.INPUT_ERROR

        player2 = self.registry.find(second)
        if player2 is None:
            return ActionStatus.INPUT_ERROR

        if not player1.visible:
            return ActionStatus.PLAYER_INVISIBLE
        if player1.is_frozen:
            return ActionStatus.PLAYER_FROZEN

        return player1, player2

    def _handle_attack(self, first: str, second: str) -> ActionStatus:
        """
        Handle attack.

        Attacking an invisible player freezes the attacker. Otherwise the
        stronger player gains the power difference and the weaker one is
        frozen; equal powers freeze both.
        """
        players = self._get_two_players(first, second)
        if isinstance(players, ActionStatus):
            return players
        player1, player2 = players

        if not player2.visible:
            player1.freeze()
            return ActionStatus.OK

        power1 = player1.power
        power2 = player2.power

        if power1 > power2:
            player1.increase_power(power1 - power2)
            player2.freeze()
        elif power1 < power2:
            player2.increase_power(power2 - power1)
            player1.freeze()
        else:
            player1.freeze()
            player2.freeze()

        return ActionStatus.OK

    def _handle_flip_visibility(self, name: str) -> ActionStatus:
        """Handle flip_visibility. Frozen players cannot flip."""
        player = self.registry.find(name)
        if player is None:
            return ActionStatus.INPUT_ERROR

        if player.is_frozen:
            return ActionStatus.PLAYER_FROZEN

        player.flip_visibility()
        return ActionStatus.OK

    def _handle_heal(self, first: str, second: str) -> ActionStatus:
        """
        Handle heal.

        The healer keeps the ceiling of half its power and gives the
        floor to a teammate.
        """
        players = self._get_two_players(first, second)
        if isinstance(players, ActionStatus):
            return players
        healer, target = players

        if healer.team != target.team:
            return ActionStatus.WRONG_TEAM

        if healer is target:
            return ActionStatus.HEAL_SELF

        given = healer.power // 2
        healer.power -= given
        target.increase_power(given)
        return ActionStatus.OK

    def _handle_super(self, first: str, second: str) -> ActionStatus:
        """
        Handle super.

        Two teammates merge into a new visible player S_<n> holding their
        combined power (capped). The originals leave the registry.
        """
        players = self._get_two_players(first, second)
        if isinstance(players, ActionStatus):
            return players
        player1, player2 = players

        if player1.team != player2.team:
            return ActionStatus.WRONG_TEAM

        if player1 is player2:
            return ActionStatus.SUPER_SELF

        super_player = Player(
            name=self.counter.next_name(),
            team=player1.team,
            power=min(MAX_POWER, player1.power + player2.power),
            visible=True,
        )

        if not self.registry.insert(super_player):
            raise WizardsError(f"Super player name {super_player.name} is already taken")

        self.registry.remove(player1.name)
        self.registry.remove(player2.name)

        logger.debug(
            "%s and %s merged into %s (power %d)",
            player1.name, player2.name, super_player.name, super_player.power,
        )
        return ActionStatus.OK


def apply_action(
    registry: PlayerRegistry,
    action: Action,
    counter: SuperNameCounter | None = None,
) -> ActionStatus:
    """
    Convenience function to apply a single action.

    Uses a fresh counter unless one is given.
    """
    machine = StateMachine(registry, counter or SuperNameCounter())
    return machine.apply(action)
