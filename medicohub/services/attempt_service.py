"""
Attempt Service
Persists attempts and builds per-assessment leaderboards
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from medicohub.extensions import db
from medicohub.errors import ValidationError, PersistenceError
from medicohub.models import Attempt
from medicohub.models.assessment import ASSESSMENT_KINDS
from medicohub.utils import to_local, isoformat

logger = logging.getLogger(__name__)


class AttemptService:
    """Append-only attempt log"""

    @staticmethod
    def record_attempt(user_id, kind, target_id, annotated, score, duration_sec, user_name=None):
        """
        Persist one attempt; every call inserts a new row

        Raises:
            ValidationError: user_id missing or kind unknown
            PersistenceError: database write failed, nothing recorded
        """
        if user_id in (None, ''):
            raise ValidationError('userId required')
        if kind not in ASSESSMENT_KINDS:
            raise ValidationError(f'Unknown assessment type: {kind}')

        attempt = Attempt(
            user_id=str(user_id),
            user_name=user_name,
            kind=kind,
            target_id=target_id,
            answers=annotated,
            score=score,
            duration_sec=duration_sec,
        )
        try:
            db.session.add(attempt)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Failed to save %s attempt for %s on %s: %s', kind, user_id, target_id, e)
            raise PersistenceError(f'Failed to submit {kind} attempt') from e

        logger.info('Recorded %s attempt %s: user=%s target=%s score=%s',
                    kind, attempt.id, user_id, target_id, score)
        return attempt

    @staticmethod
    def has_attempts(kind, target_id):
        return db.session.query(
            Attempt.query.filter_by(kind=kind, target_id=target_id).exists()
        ).scalar()

    @staticmethod
    def leaderboard_for(kind, target_id, limit=None):
        """
        Best attempts for one quiz or exam

        Highest score first; on equal score the faster attempt ranks higher.
        """
        if limit is None:
            limit = current_app.config['ATTEMPT_LEADERBOARD_LIMIT']

        attempts = Attempt.query.filter_by(
            kind=kind,
            target_id=target_id
        ).order_by(
            Attempt.score.desc(),
            Attempt.duration_sec.asc(),
            Attempt.created_at.asc(),
            Attempt.id.asc()
        ).limit(limit).all()

        return [
            {
                'rank': idx,
                'user': a.user_name or a.user_id,
                'userId': a.user_id,
                'score': a.score,
                'time': a.duration_sec,
                'date': isoformat(to_local(a.created_at)),
            }
            for idx, a in enumerate(attempts, 1)
        ]
