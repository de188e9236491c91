"""
Errors - Exception hierarchy for structural failures.

Rule violations (frozen actor, wrong team, ...) are not exceptions;
they are ActionStatus values and the simulation continues. Everything
here aborts a run.
"""

from __future__ import annotations


class WizardsError(Exception):
    """Base class for all wizards errors."""
    pass


class ScriptError(WizardsError):
    """Raised when a script is structurally invalid (bad line, unknown name, ...)."""

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is not None:
            super().__init__(f"line {line_number}: {reason}")
        else:
            super().__init__(reason)


class PlayerConstructionError(ScriptError):
    """Raised when player fields fail the construction checks."""
    pass
