"""
Poll Model
A single question with fixed options; lifecycle is active -> completed
"""
import enum

from flask import current_app
from sqlalchemy.orm import validates

from livepoll.errors import InvalidTransition
from livepoll.extensions import db
from livepoll.utils import now_utc, to_local


class PollStatus(str, enum.Enum):
    ACTIVE = 'active'
    COMPLETED = 'completed'


class Poll(db.Model):
    """Poll model"""
    __tablename__ = 'poll'

    id = db.Column(db.Integer, primary_key=True)
    question = db.Column(db.String(500), nullable=False)
    timer = db.Column(db.Integer, default=60)  # seconds, informational only
    status = db.Column(
        db.Enum(
            PollStatus,
            name='poll_status',
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=PollStatus.ACTIVE,
        index=True,
    )
    teacher_id = db.Column(
        db.Integer,
        db.ForeignKey('teacher.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=now_utc, index=True)

    # Relationships
    options = db.relationship(
        'Option',
        backref='poll',
        lazy=True,
        order_by='Option.id',
        cascade='all, delete-orphan',
    )

    def __repr__(self):
        return f'<Poll {self.id}: {self.question[:50]} ({self.status})>'

    @validates('status')
    def validate_status(self, key, value):
        """Completed polls never go back to active"""
        value = PollStatus(value)
        if self.status == PollStatus.COMPLETED and value != PollStatus.COMPLETED:
            raise InvalidTransition(
                f'Poll {self.id} is completed and cannot become {value.value}'
            )
        return value

    @property
    def is_active(self):
        return self.status == PollStatus.ACTIVE

    def complete(self):
        """
        Move the poll to completed.

        Returns:
            bool: True if the status changed, False if it was already completed
        """
        if not self.is_active:
            return False
        self.status = PollStatus.COMPLETED
        return True

    def to_dict(self, include_options=True):
        tz_name = current_app.config.get('TIMEZONE', 'UTC')
        created_at = to_local(self.created_at, tz_name)
        data = {
            'id': self.id,
            'question': self.question,
            'timer': self.timer,
            'status': self.status.value if self.status else None,
            'teacherId': self.teacher_id,
            'createdAt': created_at.isoformat() if created_at else None,
        }
        if include_options:
            data['options'] = [option.to_dict() for option in self.options]
        return data
