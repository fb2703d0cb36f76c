"""CLI commands for wellness-hub."""

from .generate import generate
from .init import init
from .serve import serve
from .users import users
from .workouts import workouts

__all__ = [
    "generate",
    "init",
    "serve",
    "users",
    "workouts",
]
