"""
LeaderboardEntry Model
Per-user cumulative XP
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc, isoformat


class LeaderboardEntry(db.Model):
    """Leaderboard entry model"""
    __tablename__ = 'leaderboard_entry'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False, default='Unknown')
    xp = db.Column(db.Integer, nullable=False, default=0)
    streak = db.Column(db.Integer, nullable=False, default=1)
    last_active = db.Column(db.DateTime, default=now_utc)

    def __repr__(self):
        return f'<LeaderboardEntry {self.user_id}: {self.xp} XP>'

    def to_dict(self):
        return {
            'userId': self.user_id,
            'name': self.name,
            'xp': self.xp,
            'streak': self.streak,
            'lastActive': isoformat(self.last_active),
        }
