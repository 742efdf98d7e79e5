"""Prep Planner application package."""

from __future__ import annotations

from .core import plan_slots as plan_slots

__all__ = ["main", "plan_slots"]


def main() -> None:
    from .cli import main as cli_main

    cli_main()
