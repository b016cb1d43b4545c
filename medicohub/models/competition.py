"""
Competition Models
Scored contest between groups over one quiz or exam
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc, isoformat


competition_group = db.Table(
    'competition_group',
    db.Column('competition_id', db.Integer, db.ForeignKey('competition.id'), primary_key=True),
    db.Column('group_id', db.Integer, db.ForeignKey('study_group.id'), primary_key=True),
)


class Competition(db.Model):
    """Competition model"""
    __tablename__ = 'competition'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    kind = db.Column(db.String(10), nullable=False)
    related_id = db.Column(db.Integer, db.ForeignKey('assessment.id'), nullable=False)
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=now_utc)

    groups = db.relationship('Group', secondary=competition_group, lazy='subquery')
    results = db.relationship(
        'CompetitionResult',
        backref='competition',
        lazy=True,
        order_by='CompetitionResult.id',
        cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Competition {self.title}>'

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'type': self.kind,
            'relatedId': self.related_id,
            'groups': [g.id for g in self.groups],
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'results': [r.to_dict() for r in self.results],
        }


class CompetitionResult(db.Model):
    """Running score of one group within one competition"""
    __tablename__ = 'competition_result'

    id = db.Column(db.Integer, primary_key=True)
    competition_id = db.Column(db.Integer, db.ForeignKey('competition.id'), nullable=False)
    group_id = db.Column(db.Integer, db.ForeignKey('study_group.id'), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)

    group = db.relationship('Group')
    participants = db.relationship(
        'CompetitionParticipant',
        backref='result',
        lazy=True,
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.UniqueConstraint('competition_id', 'group_id', name='unique_result_per_group'),
    )

    def __repr__(self):
        return f'<CompetitionResult C{self.competition_id} G{self.group_id}: {self.score}>'

    @property
    def participant_ids(self):
        return sorted(p.user_id for p in self.participants)

    def to_dict(self):
        return {
            'group': self.group_id,
            'score': self.score,
            'participants': self.participant_ids,
        }


class CompetitionParticipant(db.Model):
    """User who contributed to a group's result; unique per result"""
    __tablename__ = 'competition_participant'

    id = db.Column(db.Integer, primary_key=True)
    result_id = db.Column(db.Integer, db.ForeignKey('competition_result.id'), nullable=False)
    user_id = db.Column(db.String(64), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('result_id', 'user_id', name='unique_participant_per_result'),
    )
