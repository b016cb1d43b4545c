"""
Question Model
Multiple-choice question; options and correct answer kept as JSON values
"""
from medicohub.extensions import db


class Question(db.Model):
    """Question model"""
    __tablename__ = 'question'

    id = db.Column(db.Integer, primary_key=True)
    assessment_id = db.Column(db.Integer, db.ForeignKey('assessment.id'), nullable=False, index=True)
    order = db.Column(db.Integer, default=0)

    prompt = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, default=list)

    # Any JSON value; compared by value, not by string form
    correct_answer = db.Column(db.JSON)

    def __repr__(self):
        return f'<Question {self.id}: {self.prompt[:50]}...>'

    def to_dict(self, include_answer=False):
        data = {
            'id': self.id,
            'question': self.prompt,
            'options': self.options or [],
        }
        if include_answer:
            data['correctAnswer'] = self.correct_answer
        return data
