"""
Module entrypoint for the sprofile CLI.

This file exists so that `python -m sprofile ...` works even when the
console-script wrapper is not installed. It contains no business logic.
"""

from __future__ import annotations

from sprofile.cli import main


def _run() -> None:
    """
    Execute the command line interface.

    Raises
    ------
    SystemExit
        Always, carrying the CLI exit code.
    """
    raise SystemExit(main())


if __name__ == "__main__":
    _run()
