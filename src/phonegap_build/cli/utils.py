"""Shared helpers for CLI commands."""

import json
import sys

import click

from ..client import PhonegapBuild
from ..response import Failure, Outcome


def get_client() -> PhonegapBuild:
    """Create a client from stored or environment credentials."""
    return PhonegapBuild()


def echo_outcome(outcome: Outcome) -> None:
    """Print a successful payload as JSON, or the error and exit 1."""
    if isinstance(outcome, Failure):
        click.echo(f"Error: {outcome.message}", err=True)
        if outcome.status_code == 401:
            click.echo("Hint: Run 'pgbuild login' to authenticate.", err=True)
        sys.exit(1)
    click.echo(json.dumps(outcome.payload, indent=2))
