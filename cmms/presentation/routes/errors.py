"""
JSON error handlers for the API.
"""

from flask import jsonify, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException

from cmms import db
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import ValidationError
from cmms.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("cmms.routes.errors")


def register_error_handlers(app):
    """Render every error raised by a view as a JSON body."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        logger.info(f"Validation failed on {request.method} {request.path}: {sorted(error.errors)}")
        return jsonify({'message': error.message, 'errors': error.errors}), 400

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        logger.warning(f"CSRF check failed on {request.method} {request.path}: {error.description}")
        return jsonify({'message': error.description}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.error(
            f"Unhandled error on {request.method} {request.path}: {sanitize_exception_message(error)}",
            exc_info=True
        )
        return jsonify({'message': 'Internal server error'}), 500
