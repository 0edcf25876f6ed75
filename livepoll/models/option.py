"""
Option Model
One answer choice of a poll with its persisted vote count
"""
from livepoll.extensions import db


class Option(db.Model):
    """Option model"""
    __tablename__ = 'poll_option'

    id = db.Column(db.Integer, primary_key=True)
    poll_id = db.Column(
        db.Integer,
        db.ForeignKey('poll.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    text = db.Column(db.String(200), nullable=False)
    correct = db.Column(db.Boolean, nullable=False, default=False)  # informational
    votes = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.CheckConstraint('votes >= 0', name='ck_option_votes_non_negative'),
    )

    def __repr__(self):
        return f'<Option {self.text!r} ({self.votes} votes)>'

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'votes': self.votes,
            'correct': self.correct,
        }
