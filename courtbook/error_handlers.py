from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError
from google.api_core.exceptions import GoogleAPICallError

from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles application errors by returning their kind and message."""
    log = (
        current_app.logger.error
        if error.status_code >= 500
        else current_app.logger.warning
    )
    log(f"{error.kind}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return (
        jsonify({"success": False, "error": "NotFound", "message": "Page not found."}),
        404,
    )


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    """Handles requests made with an unsupported method."""
    return (
        jsonify(
            {
                "success": False,
                "error": "MethodNotAllowed",
                "message": "Method not allowed.",
            }
        ),
        405,
    )


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return (
        jsonify(
            {
                "success": False,
                "error": "InternalError",
                "message": "An unexpected error occurred.",
            }
        ),
        500,
    )


@error_handlers_bp.app_errorhandler(GoogleAPICallError)
def handle_db_error(e):
    """Handles Firestore errors."""
    current_app.logger.error(f"Database Error: {e}")
    # Avoid exposing raw database error details to the user
    return (
        jsonify(
            {
                "success": False,
                "error": "StorageError",
                "message": "A database error occurred. Please try again later.",
            }
        ),
        500,
    )


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """
    Handles CSRF errors, which usually indicate a session timeout or a missing token.
    """
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return (
        jsonify(
            {
                "success": False,
                "error": "CSRFError",
                "message": "Your session may have expired. Please try again.",
            }
        ),
        400,
    )
