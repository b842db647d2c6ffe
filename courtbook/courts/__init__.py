"""The courts blueprint."""

from flask import Blueprint

bp = Blueprint("courts", __name__, url_prefix="/courts")

from . import routes  # noqa: E402

__all__ = ["routes"]
