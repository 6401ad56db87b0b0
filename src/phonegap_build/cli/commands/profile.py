"""Show the authenticated user's profile."""

import click

from ..utils import echo_outcome, get_client


@click.command()
def profile() -> None:
    """Show the authenticated user's profile."""
    with get_client() as client:
        echo_outcome(client.get_profile())
