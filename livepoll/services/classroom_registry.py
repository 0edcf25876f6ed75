"""
Classroom Registry
One SessionCoordinator per room, so concurrent teachers never share a tally
"""
import logging
import threading

from livepoll.services.session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)


class ClassroomRegistry:
    """Maps room names to coordinators and connections to rooms"""

    def __init__(self, transport_factory, default_room="classroom", teacher_prefix="teacher"):
        self.transport_factory = transport_factory
        self.default_room = default_room
        self.teacher_prefix = teacher_prefix

        self._rooms = {}  # room -> SessionCoordinator
        self._connection_rooms = {}  # sid -> room
        self._lock = threading.Lock()

    def coordinator(self, room=None):
        """Get the room's coordinator, creating it on first use"""
        room = room or self.default_room
        with self._lock:
            return self._get_or_create(room)

    def _get_or_create(self, room):
        coordinator = self._rooms.get(room)
        if coordinator is None:
            coordinator = SessionCoordinator(
                room,
                self.transport_factory(room),
                teacher_prefix=self.teacher_prefix,
            )
            self._rooms[room] = coordinator
            logger.info('Opened room %s', room)
        return coordinator

    def attach(self, sid, room=None):
        room = room or self.default_room
        with self._lock:
            # room and sid mapping change together; detach never closes a room being joined
            coordinator = self._get_or_create(room)
            self._connection_rooms[sid] = room
        coordinator.connect(sid)
        return coordinator

    def for_connection(self, sid):
        """Coordinator of the room a connection belongs to (attaches to the default room if unknown)"""
        with self._lock:
            room = self._connection_rooms.get(sid)
        if room is None:
            return self.attach(sid)
        return self.coordinator(room)

    def detach(self, sid):
        """Disconnect a sid and close its room once nobody is left in it"""
        with self._lock:
            room = self._connection_rooms.pop(sid, None)
            coordinator = self._rooms.get(room) if room else None
            if coordinator is not None and room not in self._connection_rooms.values():
                del self._rooms[room]
                logger.info('Closed room %s', room)
        if coordinator is not None:
            coordinator.disconnect(sid)

    def rooms(self):
        with self._lock:
            return list(self._rooms)
