"""
Competition Service
Attributes attempt scores to groups and ranks groups within a competition
"""
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from medicohub.extensions import db
from medicohub.errors import ValidationError, NotFoundError, NotActiveError, PersistenceError
from medicohub.models import Competition, CompetitionResult, CompetitionParticipant, Group
from medicohub.utils import now_utc, as_utc

logger = logging.getLogger(__name__)


class CompetitionService:
    """Group standings for competitions"""

    @staticmethod
    def get_competition(competition_id):
        competition = db.session.get(Competition, competition_id)
        if not competition:
            raise NotFoundError('Competition not found')
        return competition

    @staticmethod
    def resolve_group(competition, user_id, group_id=None):
        """
        Group the user competes for

        Membership of the competition's groups wins; otherwise the caller
        must name a group that takes part in the competition.
        """
        user_id = str(user_id)
        for group in competition.groups:
            if group.has_member(user_id):
                return group.id

        if group_id in (None, ''):
            raise ValidationError("Could not determine user's group. Provide groupId in request.")

        try:
            group_id = int(group_id)
        except (TypeError, ValueError):
            raise ValidationError('groupId must be an integer')

        if competition.groups and group_id not in {g.id for g in competition.groups}:
            raise ValidationError('Group is not part of this competition')
        if not db.session.get(Group, group_id):
            raise NotFoundError('Group not found')
        return group_id

    @staticmethod
    def ensure_active(competition, at=None):
        """Reject attempts outside [start_date, end_date] when enforcement is on"""
        if not current_app.config['ENFORCE_COMPETITION_WINDOW']:
            return
        at = at or now_utc()
        start, end = as_utc(competition.start_date), as_utc(competition.end_date)
        if start and at < start:
            raise NotActiveError('Competition has not started')
        if end and at > end:
            raise NotActiveError('Competition has ended')

    @staticmethod
    def _increment(competition_id, group_id, score):
        return CompetitionResult.query.filter_by(
            competition_id=competition_id,
            group_id=group_id
        ).update(
            {CompetitionResult.score: CompetitionResult.score + score},
            synchronize_session=False
        )

    @staticmethod
    def _add_result_score(competition_id, group_id, score):
        """Create the group's result row on first attempt, then add score"""
        if CompetitionService._increment(competition_id, group_id, score):
            return
        db.session.add(CompetitionResult(
            competition_id=competition_id,
            group_id=group_id,
            score=score,
        ))
        try:
            db.session.flush()
        except IntegrityError:
            db.session.rollback()
            CompetitionService._increment(competition_id, group_id, score)

    @staticmethod
    def _has_participant(result_id, user_id):
        return CompetitionParticipant.query.filter_by(
            result_id=result_id,
            user_id=user_id
        ).first() is not None

    @staticmethod
    def apply_attempt(competition, group_id, user_id, score):
        """
        Add an attempt's score to its group and record the participant

        Score is summed for every attempt; a user is counted once per group.
        """
        if score < 0:
            raise ValidationError('score must not be negative')
        user_id = str(user_id)
        competition_id = competition.id

        try:
            CompetitionService._add_result_score(competition_id, group_id, score)
            db.session.commit()

            result = CompetitionResult.query.filter_by(
                competition_id=competition_id,
                group_id=group_id
            ).one()
            if not CompetitionService._has_participant(result.id, user_id):
                db.session.add(CompetitionParticipant(result_id=result.id, user_id=user_id))
                try:
                    db.session.commit()
                except IntegrityError:
                    # Same user landed twice concurrently; score is committed
                    db.session.rollback()
                    logger.info('Participant %s already recorded for competition %s',
                                user_id, competition_id)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Failed to update competition %s: %s', competition_id, e)
            raise PersistenceError('Failed to update competition results') from e

        db.session.expire(competition)
        logger.info('Competition %s: group %s +%s (user %s)', competition_id, group_id, score, user_id)
        return db.session.get(Competition, competition_id)

    @staticmethod
    def leaderboard_for(competition_id):
        """Group standings, highest score first; ties keep creation order"""
        competition = CompetitionService.get_competition(competition_id)

        board = [
            {
                'group': r.group.name if r.group else r.group_id,
                'groupId': r.group_id,
                'score': r.score,
                'participants': len(r.participants),
            }
            for r in competition.results
        ]
        board.sort(key=lambda row: -row['score'])
        return board
