"""Initialize database command."""

import click

from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success, get_data_dir


@click.command()
@async_command
async def init():
    """Create the data directory and the SQLite database.

    Safe to run again: existing tables and rows are left alone.
    """
    data_dir = get_data_dir()
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing wellness-hub in {data_dir}")
    data_dir.mkdir(parents=True, exist_ok=True)

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("wellness-hub is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create an account:")
    click.echo("     wellness-hub users create you@example.com")
    click.echo()
    click.echo("  2. Start the web interface:")
    click.echo("     wellness-hub serve")
    click.echo()
    click.echo("Set GROQ_API_KEY to generate plans with AI; without it demo plans are used.")
