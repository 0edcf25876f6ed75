"""
Models Package
Exports all database models
"""
from livepoll.models.teacher import Teacher
from livepoll.models.poll import Poll, PollStatus
from livepoll.models.option import Option

__all__ = ['Teacher', 'Poll', 'PollStatus', 'Option']
