"""
Competition Routes
Groups, competitions and group standings
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError
from medicohub.extensions import db
from medicohub.errors import register_error_handlers, ValidationError, NotFoundError, PersistenceError
from medicohub.models import Competition, Group
from medicohub.models.assessment import ASSESSMENT_KINDS, MODEL_FOR_KIND
from medicohub.services import GroupService, CompetitionService, SubmissionService
from medicohub.utils import require_admin, request_json, parse_datetime

logger = logging.getLogger(__name__)

competitions_bp = Blueprint('competitions', __name__)
register_error_handlers(competitions_bp)


# ======================= GROUPS =======================

@competitions_bp.route('/groups', methods=['POST'])
@require_admin
def create_group():
    """Create a group: {name, members}"""
    group = GroupService.create(request_json())
    return jsonify({'success': True, 'group': group.to_dict()}), 201


@competitions_bp.route('/groups/<int:group_id>', methods=['GET'])
def get_group(group_id):
    return jsonify(GroupService.get(group_id).to_dict())


@competitions_bp.route('/groups/<int:group_id>/join', methods=['POST'])
def join_group(group_id):
    group = GroupService.join(group_id, request_json().get('userId'))
    return jsonify({'success': True, 'group': group.to_dict()})


# ======================= COMPETITIONS =======================

@competitions_bp.route('/competitions', methods=['POST'])
@require_admin
def create_competition():
    """Create a competition: {title, type, relatedId, groups, startDate, endDate}"""
    data = request_json()
    title, kind, related_id = data.get('title'), data.get('type'), data.get('relatedId')
    if not title or not kind or related_id in (None, ''):
        raise ValidationError('title, type and relatedId required')
    if kind not in ASSESSMENT_KINDS:
        raise ValidationError('type must be quiz or exam')
    if not isinstance(data.get('groups') or [], list):
        raise ValidationError('groups must be a list of group ids')
    try:
        related_id = int(related_id)
        group_ids = [int(g) for g in data.get('groups') or []]
    except (TypeError, ValueError):
        raise ValidationError('relatedId and groups must be integer ids')

    target = db.session.get(MODEL_FOR_KIND[kind], related_id)
    if not target or target.kind != kind:
        raise NotFoundError(f'Target {kind} not found')

    groups = []
    for group_id in dict.fromkeys(group_ids):
        group = db.session.get(Group, group_id)
        if not group:
            raise NotFoundError(f'Group {group_id} not found')
        groups.append(group)

    try:
        start_date = parse_datetime(data.get('startDate'))
        end_date = parse_datetime(data.get('endDate'))
    except ValueError:
        raise ValidationError('startDate and endDate must be ISO-8601 dates')
    if start_date and end_date and end_date < start_date:
        raise ValidationError('endDate must not be before startDate')

    competition = Competition(
        title=title,
        kind=kind,
        related_id=target.id,
        groups=groups,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        db.session.add(competition)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError('Failed to create competition') from e

    logger.info('Created competition %s on %s %s', competition.id, kind, target.id)
    return jsonify({'success': True, 'competition': competition.to_dict()}), 201


@competitions_bp.route('/competitions/<int:competition_id>', methods=['GET'])
def get_competition(competition_id):
    return jsonify(CompetitionService.get_competition(competition_id).to_dict())


@competitions_bp.route('/competitions/<int:competition_id>/attempt', methods=['POST'])
def attempt_competition(competition_id):
    """
    Submit an attempt within a competition
    Body: {userId, name, answers, durationSec, groupId}
    """
    return jsonify(SubmissionService.submit_competition(competition_id, request_json()))


@competitions_bp.route('/competitions/<int:competition_id>/leaderboard', methods=['GET'])
def competition_leaderboard(competition_id):
    return jsonify(CompetitionService.leaderboard_for(competition_id))
