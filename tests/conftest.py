"""
Pytest configuration and fixtures
"""

from collections.abc import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from livepoll import create_app
from livepoll.extensions import db, socketio
from livepoll.models import Teacher
from livepoll.services import SessionCoordinator


class RecordingTransport:
    """Transport double that records what a coordinator sends"""

    def __init__(self, room: str = "test-room") -> None:
        self.room = room
        self.broadcasts: list[tuple[str, tuple]] = []
        self.sent: list[tuple[str, str, tuple]] = []
        self.terminated: list[str] = []

    def broadcast(self, event, *args):
        self.broadcasts.append((event, args))

    def send(self, sid, event, *args):
        self.sent.append((sid, event, args))

    def terminate(self, sid):
        self.terminated.append(sid)

    def events(self, name: str) -> list[tuple]:
        return [args for event, args in self.broadcasts if event == name]

    def sent_to(self, sid: str) -> list[tuple[str, tuple]]:
        return [(event, args) for target, event, args in self.sent if target == sid]


@pytest.fixture(scope="function")
def app() -> Generator[Flask, None, None]:
    """
    Fixture that provides an application bound to a fresh in-memory database.
    """
    test_app = create_app("testing")

    yield test_app

    with test_app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def app_ctx(app: Flask) -> Generator[Flask, None, None]:
    """
    Fixture that pushes an application context for direct service calls.
    """
    with app.app_context():
        yield app


@pytest.fixture(scope="function")
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture(scope="function")
def make_teacher(app: Flask):
    """
    Fixture that provides a factory persisting a teacher and returning its username.
    """

    def _make_teacher(username: str = "teacher4821") -> str:
        with app.app_context():
            db.session.add(Teacher(username=username))
            db.session.commit()
        return username

    return _make_teacher


@pytest.fixture(scope="function")
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture(scope="function")
def transport_factory():
    """
    Fixture that provides a room -> transport factory for registries.
    """
    return RecordingTransport


@pytest.fixture(scope="function")
def coordinator(app_ctx: Flask, transport: RecordingTransport) -> SessionCoordinator:
    """
    Fixture that provides a coordinator wired to a recording transport.
    Runs inside an application context so database calls work.
    """
    return SessionCoordinator("test-room", transport)


@pytest.fixture(scope="function")
def connect(app: Flask):
    """
    Fixture that provides a factory for Socket.IO test clients.
    Clients still connected at the end of the test are disconnected.
    """
    clients = []

    def _connect(room: str | None = None):
        query_string = f"room={room}" if room else None
        socket_client = socketio.test_client(app, query_string=query_string)
        clients.append(socket_client)
        return socket_client

    yield _connect

    for socket_client in clients:
        if socket_client.is_connected():
            socket_client.disconnect()


@pytest.fixture(scope="function")
def drain():
    """
    Fixture that provides a helper draining a socket client's queue
    and keeping the args of one event type.
    """

    def _drain(socket_client, name: str) -> list[list]:
        return [
            event["args"] for event in socket_client.get_received() if event["name"] == name
        ]

    return _drain


@pytest.fixture(scope="function")
def poll_payload() -> dict:
    return {
        "teacherUsername": "teacher4821",
        "question": "What is 2+2?",
        "timer": 30,
        "options": [
            {"text": "3", "correct": False},
            {"text": "4", "correct": True},
        ],
    }
