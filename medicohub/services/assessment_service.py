"""
Assessment Service
Create, read and update quizzes and exams
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from medicohub.extensions import db
from medicohub.errors import ValidationError, NotFoundError, AssessmentLockedError, PersistenceError
from medicohub.models import Question
from medicohub.models.assessment import QUIZ, EXAM, MODEL_FOR_KIND
from medicohub.services.attempt_service import AttemptService

logger = logging.getLogger(__name__)

DIFFICULTIES = ('easy', 'medium', 'hard')
DEFAULT_EXAM_DURATION = 60


def build_questions(raw_questions):
    """Turn [{question, options, correctAnswer}] into Question rows"""
    if raw_questions is None:
        return []
    if not isinstance(raw_questions, list):
        raise ValidationError('questions must be a list')

    questions = []
    for idx, raw in enumerate(raw_questions):
        if not isinstance(raw, dict):
            raise ValidationError(f'Question {idx + 1} must be an object')
        prompt = raw.get('question') or raw.get('prompt')
        if not prompt:
            raise ValidationError(f'Question {idx + 1} has no text')
        options = raw.get('options') or []
        if not isinstance(options, list):
            raise ValidationError(f'Question {idx + 1} options must be a list')
        questions.append(Question(
            order=idx,
            prompt=prompt,
            options=options,
            correct_answer=raw.get('correctAnswer'),
        ))
    return questions


class AssessmentService:
    """Quiz and exam storage"""

    @staticmethod
    def _save(assessment):
        try:
            db.session.add(assessment)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error('Failed to save %s: %s', assessment.kind, e)
            raise PersistenceError(f'Failed to save {assessment.kind}') from e
        return assessment

    @staticmethod
    def create_quiz(data):
        topic = data.get('topic')
        title = data.get('title') or topic
        if not title:
            raise ValidationError('title or topic required')

        difficulty = data.get('difficulty') or 'medium'
        if difficulty not in DIFFICULTIES:
            raise ValidationError(f'difficulty must be one of {", ".join(DIFFICULTIES)}')

        quiz = MODEL_FOR_KIND[QUIZ](
            title=title,
            topic=topic,
            difficulty=difficulty,
            questions=build_questions(data.get('questions')),
        )
        AssessmentService._save(quiz)
        logger.info('Created quiz %s (%d questions)', quiz.id, len(quiz.questions))
        return quiz

    @staticmethod
    def create_exam(data):
        title = data.get('title')
        if not title:
            raise ValidationError('title required')

        exam = MODEL_FOR_KIND[EXAM](
            title=title,
            topic=data.get('topic'),
            duration_minutes=_parse_duration(data.get('duration', DEFAULT_EXAM_DURATION)),
            questions=build_questions(data.get('questions')),
        )
        AssessmentService._save(exam)
        logger.info('Created exam %s (%d questions)', exam.id, len(exam.questions))
        return exam

    @staticmethod
    def get(kind, assessment_id):
        assessment = db.session.get(MODEL_FOR_KIND[kind], assessment_id)
        if not assessment or assessment.kind != kind:
            raise NotFoundError(f'{kind.capitalize()} not found')
        return assessment

    @staticmethod
    def list_all(kind, topic=None):
        query = MODEL_FOR_KIND[kind].query
        if topic:
            query = query.filter_by(topic=topic)
        return query.order_by(MODEL_FOR_KIND[kind].created_at.desc()).all()

    @staticmethod
    def update(kind, assessment_id, data):
        """
        Update metadata and, while no attempts exist, questions

        Raises:
            AssessmentLockedError: questions sent for an assessment with attempts
        """
        assessment = AssessmentService.get(kind, assessment_id)

        # Validate everything before touching the row
        changes = {}
        if 'title' in data:
            if not data['title']:
                raise ValidationError('title must not be empty')
            changes['title'] = data['title']
        if 'topic' in data:
            changes['topic'] = data['topic']
        if kind == QUIZ and 'difficulty' in data:
            if data['difficulty'] not in DIFFICULTIES:
                raise ValidationError(f'difficulty must be one of {", ".join(DIFFICULTIES)}')
            changes['difficulty'] = data['difficulty']
        if kind == EXAM and 'duration' in data:
            changes['duration_minutes'] = _parse_duration(data['duration'])

        questions = None
        if 'questions' in data:
            if AttemptService.has_attempts(kind, assessment.id):
                raise AssessmentLockedError(
                    f'{kind.capitalize()} already has attempts; questions are locked'
                )
            questions = build_questions(data['questions'])

        for field, value in changes.items():
            setattr(assessment, field, value)
        if questions is not None:
            assessment.questions = questions

        AssessmentService._save(assessment)
        logger.info('Updated %s %s', kind, assessment.id)
        return assessment


def _parse_duration(value):
    try:
        duration = int(value)
    except (TypeError, ValueError):
        raise ValidationError('duration must be an integer number of minutes')
    if duration <= 0:
        raise ValidationError('duration must be positive')
    return duration
