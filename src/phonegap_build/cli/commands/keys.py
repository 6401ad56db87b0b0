"""CLI commands for signing keys."""

import click

from ..utils import echo_outcome, get_client


@click.group()
def keys():
    """Manage signing keys."""
    pass


@keys.command("list")
@click.option("--platform", help="Only show keys for this platform (ios, android, ...)")
def list_keys(platform: str | None):
    """List your signing keys."""
    with get_client() as client:
        outcome = client.get_keys_platform(platform) if platform else client.get_keys()
        echo_outcome(outcome)
