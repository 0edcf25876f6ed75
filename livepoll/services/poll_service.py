"""
Poll Service
Creates polls, records votes and lists poll history
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from livepoll.errors import ActivePollExists, TeacherNotFound, ValidationError
from livepoll.extensions import db
from livepoll.models import Option, Poll, PollStatus, Teacher

logger = logging.getLogger(__name__)


class PollService:
    """Poll persistence operations"""

    @staticmethod
    def _require_teacher(teacher_username):
        teacher = Teacher.find_by_username(teacher_username)
        if not teacher:
            logger.warning('Teacher not found: %s', teacher_username)
            raise TeacherNotFound()
        return teacher

    @staticmethod
    def _clean_options(options):
        if not isinstance(options, list) or not options:
            raise ValidationError('At least one option is required')

        cleaned = []
        for option in options:
            text = option.get('text') if isinstance(option, dict) else None
            if not isinstance(text, str) or not text.strip():
                raise ValidationError('Every option needs text')
            cleaned.append({'text': text, 'correct': bool(option.get('correct'))})
        return cleaned

    @staticmethod
    def get_active_poll(teacher_id):
        return Poll.query.filter_by(
            teacher_id=teacher_id, status=PollStatus.ACTIVE
        ).first()

    @staticmethod
    def create_poll(teacher_username, question, options, timer=None):
        """
        Create a poll with its options for a teacher.

        This is the only way a poll becomes active, so it is where the
        one-active-poll-per-teacher rule is enforced.

        Raises:
            TeacherNotFound: no teacher with that username
            ActivePollExists: the teacher already has an active poll
            ValidationError: blank question or malformed options
        """
        logger.info('Creating poll for teacher: %s', teacher_username)

        teacher = PollService._require_teacher(teacher_username)

        if PollService.get_active_poll(teacher.id):
            raise ActivePollExists()

        if not isinstance(question, str) or not question.strip():
            raise ValidationError('Question is required')
        cleaned_options = PollService._clean_options(options)

        try:
            timer = int(timer) if timer else current_app.config['DEFAULT_POLL_TIMER']
        except (TypeError, ValueError):
            raise ValidationError('Timer must be a number of seconds')

        poll = Poll(
            question=question,
            timer=timer,
            status=PollStatus.ACTIVE,
            teacher_id=teacher.id,
        )
        for option in cleaned_options:
            poll.options.append(
                Option(text=option['text'], correct=option['correct'], votes=0)
            )

        try:
            db.session.add(poll)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        logger.info('Poll created: %s (%d options)', poll.id, len(poll.options))
        return poll

    @staticmethod
    def record_vote(poll_id, option_text):
        """
        Add one vote to the option of a poll matching option_text exactly.

        Voters are not deduplicated here; the session coordinator does that.

        Returns:
            Option or None if the option does not exist
        """
        option = Option.query.filter_by(poll_id=poll_id, text=option_text).first()

        if not option:
            logger.warning('Option %r not found for poll ID %s', option_text, poll_id)
            return None

        try:
            # Increment in SQL so concurrent voters never overwrite each other
            option.votes = Option.votes + 1
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        logger.info('Vote registered for %r in poll ID: %s', option.text, poll_id)
        return option

    @staticmethod
    def complete_poll(poll_id):
        """
        Mark an active poll completed.

        Returns:
            bool: True if this call completed the poll
        """
        poll = db.session.get(Poll, poll_id)
        if not poll or not poll.complete():
            return False

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        logger.info('Poll marked as completed: %s', poll_id)
        return True

    @staticmethod
    def list_polls(teacher_username):
        """All polls of a teacher, newest first, with options loaded"""
        teacher = PollService._require_teacher(teacher_username)

        polls = Poll.query.filter_by(teacher_id=teacher.id)\
            .options(selectinload(Poll.options))\
            .order_by(Poll.created_at.desc(), Poll.id.desc()).all()

        logger.info('%d poll(s) found for %s', len(polls), teacher_username)
        return polls
