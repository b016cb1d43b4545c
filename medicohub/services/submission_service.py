"""
Submission Service
Score -> record attempt -> competition standings -> XP credit
"""
import logging
import math

from medicohub.errors import ValidationError, NotFoundError
from medicohub.models.assessment import MODEL_FOR_KIND
from medicohub.extensions import db
from medicohub.services.scoring_service import ScoringService
from medicohub.services.attempt_service import AttemptService
from medicohub.services.assessment_service import AssessmentService
from medicohub.services.leaderboard_service import LeaderboardService
from medicohub.services.competition_service import CompetitionService
from medicohub.sockets import emit_competition_leaderboard, emit_xp_leaderboard

logger = logging.getLogger(__name__)


def parse_submission(payload):
    """
    Validate a submission body

    Returns:
        tuple: (user_id, name, answers, duration_sec)
    """
    user_id = payload.get('userId')
    if user_id in (None, ''):
        raise ValidationError('userId required')

    answers = payload.get('answers') or []
    if not isinstance(answers, list):
        raise ValidationError('answers must be a list')

    duration_sec = parse_duration_sec(payload.get('durationSec'))

    return str(user_id), payload.get('name'), answers, duration_sec


def parse_duration_sec(value):
    """Elapsed seconds as a non-negative float; booleans are rejected"""
    if value in (None, ''):
        return 0.0
    if isinstance(value, bool):
        raise ValidationError('durationSec must be a number')
    try:
        duration_sec = float(value)
    except (TypeError, ValueError):
        raise ValidationError('durationSec must be a number')
    if not math.isfinite(duration_sec):
        raise ValidationError('durationSec must be a finite number')
    if duration_sec < 0:
        raise ValidationError('durationSec must not be negative')
    return duration_sec


class SubmissionService:
    """Submission flows shared by quizzes, exams and competitions"""

    @staticmethod
    def credit_best_effort(user_id, name, score):
        """XP credit; a failure is logged and never fails the submission"""
        try:
            LeaderboardService.credit_xp(user_id, name, score)
        except Exception as e:
            db.session.rollback()
            logger.warning('Failed to update leaderboard for %s: %s', user_id, e)
            return False
        emit_xp_leaderboard()
        return True

    @staticmethod
    def submit_assessment(kind, assessment_id, payload):
        user_id, name, answers, duration_sec = parse_submission(payload)
        assessment = AssessmentService.get(kind, assessment_id)

        annotated, score = ScoringService.score(assessment.questions, answers)
        attempt = AttemptService.record_attempt(
            user_id, kind, assessment.id, annotated, score, duration_sec, user_name=name
        )

        SubmissionService.credit_best_effort(user_id, name, score)
        return {'success': True, 'attempt': attempt.to_dict(), 'score': score}

    @staticmethod
    def submit_competition(competition_id, payload):
        user_id, name, answers, duration_sec = parse_submission(payload)
        competition = CompetitionService.get_competition(competition_id)
        CompetitionService.ensure_active(competition)
        group_id = CompetitionService.resolve_group(competition, user_id, payload.get('groupId'))

        target = db.session.get(MODEL_FOR_KIND[competition.kind], competition.related_id)
        if not target:
            raise NotFoundError('Target quiz/exam not found')

        annotated, score = ScoringService.score(target.questions, answers)
        attempt = AttemptService.record_attempt(
            user_id, competition.kind, target.id, annotated, score, duration_sec, user_name=name
        )
        competition = CompetitionService.apply_attempt(competition, group_id, user_id, score)
        emit_competition_leaderboard(competition.id)

        SubmissionService.credit_best_effort(user_id, name, score)
        return {
            'success': True,
            'attempt': attempt.to_dict(),
            'score': score,
            'competition': competition.to_dict(),
        }
