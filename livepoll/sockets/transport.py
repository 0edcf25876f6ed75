"""
Socket.IO Transport
Delivers coordinator events to one Socket.IO room
"""
from livepoll.extensions import socketio


class RoomTransport:
    """Transport bound to a single Socket.IO room"""

    def __init__(self, room, namespace='/'):
        self.room = room
        self.namespace = namespace

    def broadcast(self, event, *args):
        socketio.emit(event, *args, to=self.room, namespace=self.namespace)

    def send(self, sid, event, *args):
        socketio.emit(event, *args, to=sid, namespace=self.namespace)

    def terminate(self, sid):
        socketio.server.disconnect(sid, namespace=self.namespace)
