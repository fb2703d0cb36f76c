"""CLI entry point for wellness-hub."""

import click

from . import __version__
from .commands import generate, init, serve, users, workouts
from .config import get_settings
from .logging_setup import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="wellness-hub")
def main():
    """wellness-hub: AI-generated workout and meal plans.

    Example usage:

        # Initialize the database
        wellness-hub init

        # Create an account
        wellness-hub users create you@example.com

        # Generate a weekly workout plan
        wellness-hub generate workouts you@example.com --days 4

        # Start the web interface
        wellness-hub serve
    """
    setup_logging(get_settings().log_level)


# Register commands
main.add_command(init)
main.add_command(serve)
main.add_command(users)
main.add_command(generate)
main.add_command(workouts)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
