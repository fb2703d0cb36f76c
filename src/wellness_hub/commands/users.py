"""User account commands."""

import click

from ..auth.gate import register
from ..db import UserRepository, get_db_path
from .base import async_command, echo_error, echo_success, ensure_initialized


@click.group()
def users():
    """Manage user accounts."""
    pass


@users.command("create")
@click.argument("email")
@click.option("--name", "-n", default="", help="Display name")
@click.password_option(help="Account password (prompted if omitted)")
@click.pass_context
@async_command
async def create_user(ctx, email: str, name: str, password: str):
    """Create a user account."""
    ensure_initialized(ctx)

    try:
        user = await register(UserRepository(get_db_path()), email, password, name)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Created user {user.email} (ID: {user.id})")
