"""
Utils Package
"""
from livepoll.utils.helpers import (
    now_utc,
    to_local,
    generate_teacher_username,
    is_teacher_name,
)

__all__ = [
    'now_utc',
    'to_local',
    'generate_teacher_username',
    'is_teacher_name',
]
