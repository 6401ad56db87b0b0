"""Forget stored PhoneGap Build credentials.

Usage:
    pgbuild logout    # Clear stored credentials
"""

import click

from ...auth import clear_credentials


@click.command()
def logout() -> None:
    """Log out from PhoneGap Build.

    Clears stored credentials from ~/.phonegap-build/credentials.json.
    """
    if not clear_credentials():
        click.echo("Not logged in.")
        return
    click.echo("Logged out successfully.")
