"""
User Model
Profile record used for payment gating; identity comes from the session provider
"""
from medicohub.extensions import db
from medicohub.utils.helpers import now_utc


class User(db.Model):
    """User profile; rows in app_user are written by the identity provider"""
    __tablename__ = 'app_user'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(120))
    has_paid = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=now_utc)

    def __repr__(self):
        return f'<User {self.email}>'

    def role(self, admin_emails):
        """admin when listed in config, else paid/free by payment flag"""
        if self.email and self.email.lower() in admin_emails:
            return 'admin'
        return 'paid' if self.has_paid else 'free'

    def to_dict(self, admin_emails=frozenset()):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'hasPaid': self.has_paid,
            'role': self.role(admin_emails),
        }
