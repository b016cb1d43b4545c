"""
Domain Errors
Exceptions raised by services and turned into JSON responses by the API
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from medicohub.extensions import db

logger = logging.getLogger(__name__)


class MedicoHubError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(MedicoHubError):
    """Required input missing or malformed"""
    status_code = 400


class NotFoundError(MedicoHubError):
    """Referenced assessment, competition, group or user does not exist"""
    status_code = 404


class AssessmentLockedError(MedicoHubError):
    """Questions of an assessment that already has attempts cannot change"""
    status_code = 409


class NotActiveError(MedicoHubError):
    """Competition attempt outside the start/end window"""
    status_code = 409


class PersistenceError(MedicoHubError):
    """Underlying database read or write failed"""
    status_code = 500


def register_error_handlers(blueprint):
    """Render MedicoHubError subclasses as {"error": ...} JSON"""

    @blueprint.errorhandler(MedicoHubError)
    def handle_medicohub_error(err):
        return jsonify(err.to_dict()), err.status_code

    @blueprint.errorhandler(SQLAlchemyError)
    def handle_database_error(err):
        db.session.rollback()
        logger.error('Unhandled database error: %s', err)
        return jsonify(PersistenceError('Database error').to_dict()), PersistenceError.status_code
