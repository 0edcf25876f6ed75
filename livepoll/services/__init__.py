"""
Services Package
"""
from livepoll.services.poll_service import PollService
from livepoll.services.teacher_service import TeacherService
from livepoll.services.session_coordinator import SessionCoordinator, ConnectionState
from livepoll.services.classroom_registry import ClassroomRegistry

__all__ = [
    'PollService',
    'TeacherService',
    'SessionCoordinator',
    'ConnectionState',
    'ClassroomRegistry',
]
