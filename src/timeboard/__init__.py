"""Timeboard application package."""

from __future__ import annotations


def main() -> int:
    from .cli import main as run_cli

    return run_cli()
