"""
Wizards CLI - Command-line interface for the simulation.

Usage:
    wizards run [input_file] [-o output_file]   Run a script, write the report
    wizards check <input_file>                  Validate a script without running its actions
"""

import argparse
import logging
import os
import sys

from .errors import ScriptError
from .session import INVALID_INPUT_MESSAGE, SimulationLimits, check_script, run_script

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
WIZARDS_LOG_LEVEL = os.getenv("WIZARDS_LOG_LEVEL", "WARNING")

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Wizards - turn-based team power simulation",
        prog="wizards",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=WIZARDS_LOG_LEVEL,
        help="Logging level (default: $WIZARDS_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a script and write the report")
    run_parser.add_argument("input_file", nargs="?", default="input.txt", help="Script file")
    run_parser.add_argument("--output", "-o", default="output.txt", help="Report file")
    run_parser.add_argument(
        "--max-actions", type=int, default=1000, help="Maximum number of actions"
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check", help="Validate a script without running its actions"
    )
    check_parser.add_argument("input_file", help="Script file")

    args = parser.parse_args(argv)
    # Defaults bypass choices
    if args.log_level.upper() not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        cmd_run(args)
    elif args.command == "check":
        cmd_check(args)
    else:
        parser.print_help()
        sys.exit(1)


def _read_script(path):
    """Read a script file, None if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None


def cmd_run(args):
    """Run a script and write the report."""
    text = _read_script(args.input_file)
    if text is None:
        report = f"{INVALID_INPUT_MESSAGE}\n"
    else:
        result = run_script(text, SimulationLimits(max_actions=args.max_actions))
        report = result.render()

    with open(args.output, "w", encoding="utf-8") as f:
        f.write(report)


def cmd_check(args):
    """Validate a script and its roster, print ok or the first error."""
    text = _read_script(args.input_file)
    if text is None:
        print(f"Error: Cannot read {args.input_file}")
        sys.exit(1)

    try:
        script = check_script(text)
    except ScriptError as e:
        print(f"Error: {e}")
        sys.exit(1)

    roster = script.roster
    print(
        f"ok: {roster.team_count} team(s), {len(roster.players)} player(s), "
        f"{len(script.actions)} action(s)"
    )


if __name__ == "__main__":
    main()
