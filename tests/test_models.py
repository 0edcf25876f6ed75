"""
Tests for models and helpers
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from livepoll.errors import InvalidTransition
from livepoll.extensions import db
from livepoll.models import Option, Poll, PollStatus, Teacher
from livepoll.utils import generate_teacher_username, is_teacher_name, to_local


def _poll_for(username: str) -> Poll:
    teacher = Teacher(username=username)
    poll = Poll(question="Q?", teacher=teacher, status=PollStatus.ACTIVE)
    poll.options.append(Option(text="A", correct=True))
    db.session.add(poll)
    db.session.commit()
    return poll


class TestTeacher:
    """Test cases for the teacher model"""

    def test_find_by_username_ignores_case(self, app_ctx) -> None:
        db.session.add(Teacher(username="Teacher4821"))
        db.session.commit()

        assert Teacher.find_by_username("teacher4821").username == "Teacher4821"
        assert Teacher.find_by_username("TEACHER4821") is not None
        assert Teacher.find_by_username("teacher0000") is None
        assert Teacher.find_by_username("") is None

    def test_username_unique_ignoring_case(self, app_ctx) -> None:
        db.session.add(Teacher(username="teacher4821"))
        db.session.commit()

        db.session.add(Teacher(username="TEACHER4821"))
        with pytest.raises(IntegrityError):
            db.session.commit()
        db.session.rollback()

    def test_delete_cascades_to_polls(self, app_ctx) -> None:
        poll = _poll_for("teacher4821")

        db.session.delete(poll.teacher)
        db.session.commit()

        assert Poll.query.count() == 0
        assert Option.query.count() == 0


class TestPollStatus:
    """Test cases for the poll lifecycle"""

    def test_defaults(self, app_ctx) -> None:
        poll = _poll_for("teacher4821")

        assert poll.status == PollStatus.ACTIVE
        assert poll.timer == 60
        assert poll.options[0].votes == 0

    def test_complete(self, app_ctx) -> None:
        poll = _poll_for("teacher4821")

        assert poll.complete() is True
        assert poll.complete() is False
        assert poll.status == PollStatus.COMPLETED

    def test_completed_cannot_reactivate(self, app_ctx) -> None:
        poll = _poll_for("teacher4821")
        poll.complete()

        with pytest.raises(InvalidTransition):
            poll.status = PollStatus.ACTIVE

        with pytest.raises(InvalidTransition):
            poll.status = "active"

    def test_to_dict(self, app_ctx) -> None:
        poll = _poll_for("teacher4821")

        data = poll.to_dict()

        assert data["question"] == "Q?"
        assert data["status"] == "active"
        assert data["teacherId"] == poll.teacher_id
        assert data["createdAt"].endswith("+00:00")
        assert data["options"] == [
            {"id": poll.options[0].id, "text": "A", "votes": 0, "correct": True}
        ]
        assert "options" not in poll.to_dict(include_options=False)


class TestHelpers:
    """Test cases for helper functions"""

    def test_generated_teacher_username(self) -> None:
        for _ in range(20):
            name = generate_teacher_username()
            assert name.startswith("teacher")
            assert 1000 <= int(name[len("teacher"):]) <= 9999

    @pytest.mark.parametrize(
        "username,expected",
        [("teacher4821", True), ("Teacher1", True), ("TEACHER", True), ("alice", False), ("ateacher", False)],
    )
    def test_is_teacher_name(self, username, expected) -> None:
        assert is_teacher_name(username) is expected

    def test_to_local_treats_naive_as_utc(self) -> None:
        local = to_local(datetime(2024, 1, 1, 12, 0), "Asia/Kolkata")

        assert local.hour == 17
        assert local.minute == 30
        assert to_local(None) is None
