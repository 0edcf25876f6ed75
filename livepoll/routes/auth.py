"""
Authentication Routes
Teacher login hands out a generated identity; there are no credentials
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from livepoll.services import TeacherService

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/teacher-login', methods=['POST'])
def teacher_login():
    """Create a teacher with a random username"""
    try:
        teacher = TeacherService.login()
    except SQLAlchemyError as e:
        logger.error('Teacher login failed: %s', e)
        return jsonify({'error': 'Login failed', 'details': str(e)}), 500

    return jsonify({
        'status': 'success',
        'username': teacher.username,
    }), 201
