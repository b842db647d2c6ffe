"""Session-based access control for court routes."""

from .decorators import login_required, role_required

__all__ = ["login_required", "role_required"]
