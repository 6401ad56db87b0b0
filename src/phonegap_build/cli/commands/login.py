"""Store PhoneGap Build credentials.

The `pgbuild login` command checks the given credentials against the API and
saves them for later commands.

Usage:
    pgbuild login --token TOKEN               # Token authentication
    pgbuild login --username USER             # Basic auth, prompts for password
"""

import sys

import click

from ...auth import Credentials, save_credentials
from ...config import CREDENTIALS_FILE
from ..utils import get_client


@click.command()
@click.option("--token", help="Authentication token")
@click.option("--username", help="Username for basic authentication")
@click.option("--password", help="Password for basic authentication")
def login(token: str | None, username: str | None, password: str | None) -> None:
    """Authenticate with PhoneGap Build.

    Credentials are stored in ~/.phonegap-build/credentials.json.

    Examples:
        pgbuild login --token TOKEN
        pgbuild login --username me@example.com
    """
    if token and username:
        click.echo("Error: Use either --token or --username, not both.", err=True)
        sys.exit(1)
    if not token and not username:
        click.echo("Error: Provide --token or --username.", err=True)
        sys.exit(1)

    if token:
        creds = Credentials.from_token(token)
    else:
        if not password:
            password = click.prompt("Password", hide_input=True)
        creds = Credentials.from_basic(username, password)

    with get_client() as client:
        if creds.token:
            client.set_token(creds.token)
        else:
            client.set_credentials(creds.username, creds.password)
        outcome = client.get_profile()

    if not outcome.ok:
        click.echo(f"Error: {outcome.error}", err=True)
        sys.exit(1)

    save_credentials(creds)
    click.echo(f"Authenticated successfully. Credentials saved to {CREDENTIALS_FILE}")
