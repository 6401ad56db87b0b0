#!/usr/bin/env python3
"""pgbuild - command line access to PhoneGap Build

Usage:
    pgbuild login --token TOKEN
    pgbuild login --username USER [--password PASS]
    pgbuild logout
    pgbuild profile
    pgbuild apps list|get|delete|build
    pgbuild keys list [--platform PLATFORM]
"""

import logging
import sys

import click

from ..config import __version__
from .commands import login, logout
from .commands.apps import apps
from .commands.keys import keys
from .commands.profile import profile


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP requests")
def cli(verbose: bool):
    """pgbuild - command line access to PhoneGap Build"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Authentication
cli.add_command(login.login)
cli.add_command(logout.logout)

# Resources
cli.add_command(profile)
cli.add_command(apps)
cli.add_command(keys)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except (click.Abort, KeyboardInterrupt):
        click.echo(err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
