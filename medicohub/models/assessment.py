"""
Assessment Models
Quiz and Exam share one table, told apart by the kind column
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc, isoformat

QUIZ = 'quiz'
EXAM = 'exam'
ASSESSMENT_KINDS = (QUIZ, EXAM)


class Assessment(db.Model):
    """Ordered set of questions with correct answers"""
    __tablename__ = 'assessment'

    id = db.Column(db.Integer, primary_key=True)
    kind = db.Column(db.String(10), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    topic = db.Column(db.String(200), index=True)
    created_at = db.Column(db.DateTime, default=now_utc)

    # Quiz only
    difficulty = db.Column(db.String(20))

    # Exam only (minutes)
    duration_minutes = db.Column(db.Integer)

    questions = db.relationship(
        'Question',
        backref='assessment',
        lazy=True,
        order_by='Question.order',
        cascade='all, delete-orphan'
    )

    __mapper_args__ = {
        'polymorphic_on': kind,
    }

    def __repr__(self):
        return f'<{self.kind.capitalize()} {self.id}: {self.title}>'

    def to_dict(self, include_answers=False):
        data = {
            'id': self.id,
            'type': self.kind,
            'title': self.title,
            'topic': self.topic,
            'createdAt': isoformat(self.created_at),
            'questions': [q.to_dict(include_answers) for q in self.questions],
        }
        if self.kind == QUIZ:
            data['difficulty'] = self.difficulty
        else:
            data['duration'] = self.duration_minutes
        return data


class Quiz(Assessment):
    """Quiz: topic and difficulty"""
    __mapper_args__ = {
        'polymorphic_identity': QUIZ,
    }


class Exam(Assessment):
    """Exam: duration limit in minutes"""
    __mapper_args__ = {
        'polymorphic_identity': EXAM,
    }


MODEL_FOR_KIND = {
    QUIZ: Quiz,
    EXAM: Exam,
}
