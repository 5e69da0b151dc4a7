"""KnightSprint command-line interface."""

from knightsprint.cli.app import main

__all__ = ["main"]
