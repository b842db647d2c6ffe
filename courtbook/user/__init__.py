"""User records consumed by the reservation engine."""

from .models import StudentSnapshot, User

__all__ = ["StudentSnapshot", "User"]
