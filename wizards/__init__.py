"""
Wizards - Turn-based team power simulation.

A roster of players split into teams, each headed by a wizard, plays
through a script of actions (attack, flip_visibility, heal, super).
The wizard of the strongest team is chosen at the end.

The package provides:
- A name-ordered player registry
- The action state machine
- Team power aggregation and the verdict
- Script parsing, a simulation driver, a CLI and an HTTP API
"""

__version__ = "0.1.0"
