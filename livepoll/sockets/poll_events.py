"""
Socket.IO Event Handlers
Real-time polling events, forwarded to the room's session coordinator
"""
from flask import current_app, request
from flask_socketio import join_room
from livepoll.extensions import socketio


def get_registry():
    return current_app.extensions['classrooms']


def register_socket_events():
    """Register all Socket.IO event handlers"""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Client connects, optionally naming its room with ?room="""
        registry = get_registry()
        room = request.args.get('room') or registry.default_room
        join_room(room)
        registry.attach(request.sid, room)

    @socketio.on('joinChat')
    def handle_join_chat(data):
        username = data.get('username') if isinstance(data, dict) else None
        get_registry().for_connection(request.sid).join(request.sid, username)

    @socketio.on('createPoll')
    def handle_create_poll(data):
        get_registry().for_connection(request.sid).create_poll(request.sid, data)

    @socketio.on('submitAnswer')
    def handle_submit_answer(data):
        get_registry().for_connection(request.sid).submit_answer(data)

    @socketio.on('kickOut')
    def handle_kick_out(target_username):
        get_registry().for_connection(request.sid).kick(target_username)

    @socketio.on('chatMessage')
    def handle_chat_message(payload):
        get_registry().for_connection(request.sid).relay_chat(payload)

    @socketio.on('studentLogin')
    def handle_student_login(username):
        get_registry().for_connection(request.sid).student_login(request.sid, username)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        get_registry().detach(request.sid)
