"""
Session Coordinator
Live state of one classroom: who is connected, the running tally,
who has answered, and when the current poll is over
"""
import enum
import logging
import threading

from sqlalchemy.exc import SQLAlchemyError

from livepoll.errors import LivePollError
from livepoll.services.poll_service import PollService
from livepoll.utils import is_teacher_name

logger = logging.getLogger(__name__)

KICKED_MESSAGE = "You have been kicked out."
LOGIN_MESSAGE = "Login successful"


class ConnectionState(enum.Enum):
    CONNECTED = 'connected'  # socket open, no username yet
    JOINED = 'joined'


class Connection:
    """One socket connection in a classroom"""

    def __init__(self, sid):
        self.sid = sid
        self.state = ConnectionState.CONNECTED
        self.username = None

    def __repr__(self):
        return f'<Connection {self.sid} {self.state.value} {self.username}>'

    @property
    def is_joined(self):
        return self.state is ConnectionState.JOINED

    def join(self, username):
        self.username = username
        self.state = ConnectionState.JOINED


class SessionCoordinator:
    """
    Ephemeral polling state for a single room.

    The transport must provide:
        broadcast(event, *args)   - to every connection in the room
        send(sid, event, *args)   - to one connection
        terminate(sid)            - force a connection closed

    Every event runs under the coordinator lock so one event is fully
    handled (database writes included) before the next one starts.
    The lock is re-entrant because terminating a connection fires the
    disconnect handler on the same thread.
    """

    def __init__(self, room, transport, teacher_prefix="teacher"):
        self.room = room
        self.transport = transport
        self.teacher_prefix = teacher_prefix

        self.connections = {}  # sid -> Connection, insertion ordered
        self.tally = {}  # option text -> count
        self.answered = set()

        self._lock = threading.RLock()

    # ================= DERIVED STATE =================

    def participants(self):
        """Usernames of joined connections, in join order"""
        return [c.username for c in self.connections.values() if c.is_joined]

    def student_usernames(self):
        return {
            name for name in self.participants()
            if not is_teacher_name(name, self.teacher_prefix)
        }

    def everyone_answered(self):
        students = self.student_usernames()
        return bool(students) and students <= self.answered

    def _broadcast_participants(self):
        self.transport.broadcast('participantsUpdate', self.participants())

    # ================= CONNECTION LIFECYCLE =================

    def connect(self, sid):
        with self._lock:
            if sid not in self.connections:
                self.connections[sid] = Connection(sid)
            logger.info('New client connected: %s (room %s)', sid, self.room)

    def join(self, sid, username):
        with self._lock:
            if not isinstance(username, str) or not username.strip():
                logger.warning('Join without a valid username from %s: %r', sid, username)
                return

            connection = self.connections.get(sid)
            if connection is None:
                connection = self.connections[sid] = Connection(sid)
            connection.join(username)

            logger.info(
                '%s joined room %s. Total: %d',
                username, self.room, len(self.participants()),
            )
            self._broadcast_participants()

    def disconnect(self, sid):
        """Drop a connection; a second call for the same sid is a no-op"""
        with self._lock:
            connection = self.connections.pop(sid, None)
            if connection is None:
                return

            logger.info('Disconnected: %s %s', sid, connection.username)
            if connection.username:
                self.answered.discard(connection.username)
            self._broadcast_participants()

    def kick(self, target_username):
        """Disconnect the first connection using target_username"""
        with self._lock:
            logger.info('Kick requested for: %s', target_username)

            target = next(
                (c for c in self.connections.values()
                 if c.is_joined and c.username == target_username),
                None,
            )
            if target is not None:
                self.transport.send(target.sid, 'kickedOut', {'message': KICKED_MESSAGE})
                del self.connections[target.sid]
                self.answered.discard(target.username)
                self.transport.terminate(target.sid)
                logger.info('Kicked %s (%s)', target.username, target.sid)

            self._broadcast_participants()

    # ================= POLLING =================

    def create_poll(self, sid, data):
        """
        Start a new poll for the requesting connection.

        Failures go back to the requester only; the tally is kept.
        """
        with self._lock:
            data = data if isinstance(data, dict) else {}
            logger.info('Poll creation requested by: %s', data.get('teacherUsername'))

            try:
                poll = PollService.create_poll(
                    data.get('teacherUsername'),
                    data.get('question'),
                    data.get('options'),
                    timer=data.get('timer'),
                )
            except LivePollError as e:
                logger.warning('Poll rejected: %s', e.message)
                self.transport.send(sid, 'errorCreatingPoll', e.message)
                return None
            except SQLAlchemyError as e:
                logger.error('Error creating poll: %s', e)
                self.transport.send(sid, 'errorCreatingPoll', 'Failed to create poll')
                return None

            self.tally = {}
            self.answered = set()
            self.transport.broadcast('pollCreated', poll.to_dict())
            return poll

    def submit_answer(self, data):
        """
        Count one answer and end the poll once every student has answered.

        Incomplete submissions are dropped without a reply.
        """
        with self._lock:
            data = data if isinstance(data, dict) else {}
            username = data.get('username')
            option = data.get('option')
            poll_id = data.get('pollId')

            logger.info('%s answered: %s (poll ID: %s)', username, option, poll_id)

            if not username or not option or not poll_id:
                logger.warning(
                    'Invalid answer received: %r',
                    {'username': username, 'option': option, 'pollId': poll_id},
                )
                return False

            if not isinstance(username, str) or not isinstance(option, str):
                logger.warning('Non-text answer received: %r', data)
                return False

            try:
                poll_id = int(poll_id)
            except (TypeError, ValueError):
                logger.warning('Invalid poll ID in answer: %r', poll_id)
                return False

            if username in self.answered:
                logger.warning('%s already answered, ignoring', username)
                return False

            self.tally[option] = self.tally.get(option, 0) + 1
            self.answered.add(username)

            try:
                PollService.record_vote(poll_id, option)
            except SQLAlchemyError as e:
                logger.error('Error while voting: %s', e)

            self.transport.broadcast('pollResults', dict(self.tally))

            if self.everyone_answered():
                logger.info('All students have answered. Ending poll %s', poll_id)
                try:
                    PollService.complete_poll(poll_id)
                except SQLAlchemyError as e:
                    logger.error('Error updating poll status: %s', e)
                # Clients are told regardless of the status write
                self.transport.broadcast('pollOver')
            else:
                logger.info(
                    'Still waiting: %d/%d',
                    len(self.answered), len(self.student_usernames()),
                )
            return True

    # ================= STATELESS EVENTS =================

    def relay_chat(self, payload):
        with self._lock:
            logger.debug('Chat message: %r', payload)
            self.transport.broadcast('chatMessage', payload)

    def student_login(self, sid, username):
        logger.info('Student logged in: %s', username)
        self.transport.send(sid, 'loginSuccess', {'message': LOGIN_MESSAGE, 'name': username})
