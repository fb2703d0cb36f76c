"""User account model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """An authenticated identity that owns workouts and nutrition plans."""

    email: str
    password_hash: str
    display_name: str = ""
    id: int | None = None
    created_at: datetime | None = None

    @property
    def name(self) -> str:
        """Name to greet the user with."""
        return self.display_name or self.email.split("@")[0]
