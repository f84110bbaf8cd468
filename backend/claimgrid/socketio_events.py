from flask import current_app, request
from flask_socketio import ConnectionRefusedError

from claimgrid import socketio
from claimgrid.errors import ConnectionRefused


class SocketIOTransport:
    """Publishes coordinator events through the shared SocketIO server."""

    def __init__(self, namespace: str = '/'):
        self.namespace = namespace

    def send(self, event, data, to):
        socketio.emit(event, data, to=to, namespace=self.namespace)

    def broadcast(self, event, data, skip=None):
        socketio.emit(event, data, namespace=self.namespace, skip_sid=skip)

    def close(self, sid):
        socketio.server.disconnect(sid, namespace=self.namespace)


def _coordinator():
    return current_app.extensions['claimgrid']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _client_address() -> str:
    if current_app.config.get('TRUST_FORWARDED_FOR'):
        forwarded = request.headers.get('X-Forwarded-For', '')
        first = forwarded.split(',')[0].strip()
        if first:
            return first
    return request.remote_addr or 'unknown'


def handle_connect(auth=None):
    try:
        _coordinator().connect(_get_sid(), _client_address())
    except ConnectionRefused as exc:
        raise ConnectionRefusedError(exc.reason)


def handle_disconnect(reason=None):
    _coordinator().disconnect(_get_sid())


def handle_claim_cell(data=None):
    _coordinator().claim(_get_sid(), data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('claim-cell', handle_claim_cell, namespace=namespace)
