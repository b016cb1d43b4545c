"""
Group Model
Named set of user identities
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc


class GroupMember(db.Model):
    """Membership row; composite key keeps members a set"""
    __tablename__ = 'group_member'

    group_id = db.Column(db.Integer, db.ForeignKey('study_group.id'), primary_key=True)
    user_id = db.Column(db.String(64), primary_key=True)
    joined_at = db.Column(db.DateTime, default=now_utc)


class Group(db.Model):
    """Group model"""
    __tablename__ = 'study_group'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=now_utc)

    memberships = db.relationship(
        'GroupMember',
        backref='group',
        lazy=True,
        cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Group {self.name}>'

    @property
    def member_ids(self):
        return {m.user_id for m in self.memberships}

    def has_member(self, user_id):
        return str(user_id) in self.member_ids

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'members': sorted(self.member_ids),
        }
