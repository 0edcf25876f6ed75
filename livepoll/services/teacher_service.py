"""
Teacher Service
Teacher "login": a fresh random identity, no password
"""
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from livepoll.extensions import db
from livepoll.models import Teacher
from livepoll.utils import generate_teacher_username

logger = logging.getLogger(__name__)


class TeacherService:
    """Teacher identity management"""

    @staticmethod
    def login():
        """
        Create and persist a teacher with a generated username.

        Retries on a name collision up to TEACHER_LOGIN_ATTEMPTS times,
        then re-raises the IntegrityError.
        """
        prefix = current_app.config['TEACHER_USERNAME_PREFIX']
        attempts = current_app.config['TEACHER_LOGIN_ATTEMPTS']

        for attempt in range(1, attempts + 1):
            teacher = Teacher(username=generate_teacher_username(prefix))
            db.session.add(teacher)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                logger.warning(
                    'Username %s taken (attempt %d/%d)',
                    teacher.username, attempt, attempts,
                )
                if attempt == attempts:
                    raise
                continue

            logger.info('Teacher logged in: %s', teacher.username)
            return teacher
