"""CLI commands for managing applications and builds."""

import click

from ..utils import echo_outcome, get_client


@click.group()
def apps():
    """Manage applications."""
    pass


@apps.command("list")
def list_apps():
    """List your applications."""
    with get_client() as client:
        echo_outcome(client.get_applications())


@apps.command("get")
@click.argument("app_id")
def get_app(app_id: str):
    """Show one application."""
    with get_client() as client:
        echo_outcome(client.get_application(app_id))


@apps.command("delete")
@click.argument("app_id")
@click.confirmation_option(prompt="Delete this application?")
def delete_app(app_id: str):
    """Delete an application."""
    with get_client() as client:
        echo_outcome(client.delete_application(app_id))


@apps.command("build")
@click.argument("app_id")
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    help="Platform to build (repeatable). Defaults to all platforms.",
)
def build_app(app_id: str, platforms: tuple[str, ...]):
    """Queue a build of an application."""
    with get_client() as client:
        echo_outcome(client.build_application(app_id, list(platforms) or None))
