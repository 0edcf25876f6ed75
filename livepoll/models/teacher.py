"""
Teacher Model
Teachers are created on login with a generated name; no credentials
"""
from livepoll.extensions import db
from livepoll.utils import now_utc


class Teacher(db.Model):
    """Teacher model"""
    __tablename__ = 'teacher'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=now_utc)

    # Relationships
    polls = db.relationship(
        'Poll',
        backref='teacher',
        lazy=True,
        cascade='all, delete-orphan',
    )

    def __repr__(self):
        return f'<Teacher {self.username}>'

    @classmethod
    def find_by_username(cls, username):
        """Case-insensitive lookup"""
        if not username:
            return None
        return cls.query.filter(
            db.func.lower(cls.username) == username.lower()
        ).first()


# Usernames are unique regardless of case
db.Index('ix_teacher_username_lower', db.func.lower(Teacher.username), unique=True)
