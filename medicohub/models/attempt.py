"""
Attempt Model
One submission of answers by one user against one quiz or exam
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc, isoformat


class Attempt(db.Model):
    """Append-only attempt record"""
    __tablename__ = 'attempt'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    user_name = db.Column(db.String(120))
    kind = db.Column(db.String(10), nullable=False)
    target_id = db.Column(db.Integer, nullable=False)

    # [{questionId, selected, correct}, ...]
    answers = db.Column(db.JSON, nullable=False, default=list)
    score = db.Column(db.Integer, nullable=False, default=0)
    duration_sec = db.Column(db.Float, nullable=False, default=0.0)
    created_at = db.Column(db.DateTime, default=now_utc)

    __table_args__ = (
        db.Index('ix_attempt_kind_target', 'kind', 'target_id'),
    )

    def __repr__(self):
        return f'<Attempt {self.kind} {self.target_id} by {self.user_id}: {self.score}>'

    def to_dict(self):
        return {
            'id': self.id,
            'user': self.user_id,
            'name': self.user_name,
            'type': self.kind,
            'targetId': self.target_id,
            'answers': self.answers,
            'score': self.score,
            'durationSec': self.duration_sec,
            'createdAt': isoformat(self.created_at),
        }
