"""
Poll Routes
Poll history for a teacher
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from livepoll.errors import LivePollError
from livepoll.services import PollService

logger = logging.getLogger(__name__)

polls_bp = Blueprint('polls', __name__)


@polls_bp.route('/polls/', defaults={'teacher_username': ''})
@polls_bp.route('/polls/<teacher_username>')
def get_polls(teacher_username):
    """All polls of a teacher, newest first, with their options"""
    if not teacher_username.strip():
        return jsonify({'error': 'Teacher username is required'}), 400

    try:
        polls = PollService.list_polls(teacher_username)
    except LivePollError as e:
        return jsonify({'error': e.message}), e.status_code
    except SQLAlchemyError as e:
        logger.error('Error fetching poll history: %s', e)
        return jsonify({'error': 'Failed to fetch polls', 'details': str(e)}), 500

    return jsonify({'data': [poll.to_dict() for poll in polls]}), 200
