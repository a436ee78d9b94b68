import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db

logger = logging.getLogger(__name__)


class MaisonError(Exception):
    """Base for errors that map onto the uniform ``{success: false, error}`` response."""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None, details=None, extra=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details
        self.extra = extra or {}

    def to_dict(self):
        body = {'success': False, 'error': self.message}
        if self.details is not None:
            body['details'] = self.details
        body.update(self.extra)
        return body


class ValidationError(MaisonError):
    status_code = 400
    default_message = 'Invalid request'


class AuthenticationError(MaisonError):
    status_code = 401
    default_message = 'Not authenticated'


class NotFoundError(MaisonError):
    status_code = 404
    default_message = 'Not found'


class UpstreamError(MaisonError):
    """Payment gateway or exchange-rate source failure."""
    status_code = 500
    default_message = 'Upstream service error'


class PersistenceError(MaisonError):
    status_code = 500
    default_message = 'Database error'


def error_response(message, status_code, details=None):
    body = {'success': False, 'error': message}
    if details is not None:
        body['details'] = details
    return jsonify(body), status_code


def register_error_handlers(app):
    @app.errorhandler(MaisonError)
    def handle_maison_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', error.__class__.__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.exception('Database error')
        return error_response('Database error', 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code is None or error.code < 400:
            return error
        return error_response(error.description or error.name, error.code)
