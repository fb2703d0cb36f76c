"""Workout history commands."""

import click

from ..db import WorkoutRepository, get_db_path
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    sign_in,
)


@click.group()
def workouts():
    """List and complete saved workouts."""
    pass


@workouts.command("list")
@click.argument("email")
@click.password_option(confirmation_prompt=False, help="Account password")
@click.pass_context
@async_command
async def list_workouts(ctx, email: str, password: str):
    """List saved workouts for EMAIL, newest first."""
    ensure_initialized(ctx)
    user = await sign_in(ctx, email, password)

    items = await WorkoutRepository(get_db_path()).list_for_user(user.id)
    if not items:
        echo_info("No workouts yet. Run 'wellness-hub generate workouts' to create some.")
        return

    rows = [
        [
            str(w.id),
            w.title[:40],
            w.scheduled_date.isoformat() if w.scheduled_date else "-",
            "yes" if w.completed else "no",
            w.created_at.strftime("%Y-%m-%d") if w.created_at else "-",
        ]
        for w in items
    ]
    click.echo(format_table(["ID", "Title", "Scheduled", "Done", "Created"], rows))


@workouts.command("complete")
@click.argument("email")
@click.argument("workout_id", type=int)
@click.password_option(confirmation_prompt=False, help="Account password")
@click.pass_context
@async_command
async def complete_workout(ctx, email: str, workout_id: int, password: str):
    """Mark workout WORKOUT_ID as complete."""
    ensure_initialized(ctx)
    user = await sign_in(ctx, email, password)

    workout = await WorkoutRepository(get_db_path()).mark_complete(user.id, workout_id)
    if workout is None:
        echo_error(f"Workout ID {workout_id} not found")
        ctx.exit(1)

    echo_success(f"Completed '{workout.title}'")
