"""Shared CLI utilities."""

import asyncio
from functools import wraps
from pathlib import Path

import click

from ..auth.gate import authenticate
from ..config import get_settings
from ..db import UserRepository, get_db_path
from ..errors import Unauthenticated
from ..models.user import User


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_settings().data_dir


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'wellness-hub init' first."
        )
        ctx.exit(1)


async def sign_in(ctx: click.Context, email: str, password: str) -> User:
    """Authenticate a CLI user, exiting on bad credentials."""
    try:
        return await authenticate(UserRepository(get_db_path()), email, password)
    except Unauthenticated as e:
        echo_error(str(e))
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format rows as a left-aligned text table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    def line(cells) -> str:
        return "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(cells)).rstrip()

    lines = [line(headers), line("-" * w for w in widths)]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)
