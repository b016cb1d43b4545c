"""
Admin Routes
User listing and payment approval, gated by the configured admin list
"""
import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from medicohub.extensions import db
from medicohub.errors import register_error_handlers, NotFoundError, PersistenceError
from medicohub.models import User
from medicohub.utils import require_admin

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)
register_error_handlers(admin_bp)


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError('User not found')
    return user


@admin_bp.route('/users', methods=['GET'])
@require_admin
def list_users():
    admins = current_app.config['ADMIN_EMAILS']
    users = User.query.order_by(User.created_at.desc()).all()
    return jsonify([u.to_dict(admins) for u in users])


@admin_bp.route('/users/<int:user_id>/toggle-payment', methods=['PUT'])
@require_admin
def toggle_payment(user_id):
    """Flip a user's payment flag (paid <-> free)"""
    user = _get_user(user_id)
    user.has_paid = not user.has_paid
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to update payment status') from e

    logger.info('Payment status of user %s set to %s', user.email, user.has_paid)
    return jsonify({
        'message': 'Payment status updated',
        'user': user.to_dict(current_app.config['ADMIN_EMAILS']),
    })


@admin_bp.route('/users/<int:user_id>/role', methods=['GET'])
@require_admin
def user_role(user_id):
    user = _get_user(user_id)
    return jsonify({'id': user.id, 'role': user.role(current_app.config['ADMIN_EMAILS'])})
