"""
Pytest fixtures for Wizards tests.
"""

import pytest

from ..engine_core.player import Player
from ..engine_core.registry import PlayerRegistry
from ..engine_core.state_machine import StateMachine, SuperNameCounter


SAMPLE_SCRIPT = """2
Harry
Voldemort
4
Ron
0
500
True
Draco
1
300
True
Hermione
0
100
True
Lucius
1
200
False
attack Ron Draco
heal Hermione Ron
flip_visibility Lucius
attack Draco Ron
super Ron Hermione
"""


@pytest.fixture
def empty_registry() -> PlayerRegistry:
    """Create an empty registry."""
    return PlayerRegistry()


@pytest.fixture
def registry() -> PlayerRegistry:
    """
    Create a registry with two teams.

    Team 0: Harry (500), Ron (300), Neville (frozen)
    Team 1: Draco (400), Lucius (200, invisible)
    """
    registry = PlayerRegistry()
    for player in [
        Player(name="Harry", team=0, power=500, visible=True),
        Player(name="Ron", team=0, power=300, visible=True),
        Player(name="Neville", team=0, power=0, visible=True),
        Player(name="Draco", team=1, power=400, visible=True),
        Player(name="Lucius", team=1, power=200, visible=False),
    ]:
        registry.insert(player)
    return registry


@pytest.fixture
def counter() -> SuperNameCounter:
    """Create a fresh super-name counter."""
    return SuperNameCounter()


@pytest.fixture
def machine(registry: PlayerRegistry, counter: SuperNameCounter) -> StateMachine:
    """Create a state machine over the two-team registry."""
    return StateMachine(registry, counter)


@pytest.fixture
def sample_script() -> str:
    """A valid two-team script with one rule violation."""
    return SAMPLE_SCRIPT
