"""
Sockets Package
"""
from livepoll.sockets.poll_events import register_socket_events
from livepoll.sockets.transport import RoomTransport

__all__ = ['register_socket_events', 'RoomTransport']
