import pytest

from claimgrid import create_app, socketio
from claimgrid.models import Identity
from config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    GRID_ROWS = 40
    GRID_COLS = 60
    COOLDOWN_MS = 0
    RATE_LIMIT_WINDOW_MS = 1000
    RATE_LIMIT_MAX = 20
    MAX_CONNECTIONS_PER_ADDRESS = 5
    NAME_ATTEMPTS = 50
    RELEASE_NAMES_ON_DISCONNECT = False
    SOCKETIO_NAMESPACE = '/'
    # Lets tests pick a source address through X-Forwarded-For
    TRUST_FORWARDED_FOR = True


class Recorder:
    """Transport double that keeps every event in publish order."""

    def __init__(self):
        self.events = []

    def send(self, event, data, to):
        self.events.append(('send', event, data, to))

    def broadcast(self, event, data, skip=None):
        self.events.append(('broadcast', event, data, skip))

    def close(self, sid):
        self.events.append(('close', None, None, sid))

    def named(self, event):
        return [e for e in self.events if e[1] == event]

    def clear(self):
        self.events = []


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect_client(flask_app):
    """Factory for Socket.IO test clients coming from a given address."""
    created = []

    def _connect(address='10.0.0.1'):
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            headers={'X-Forwarded-For': address},
        )
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(connect_client):
    return connect_client()


@pytest.fixture()
def recorder():
    return Recorder()


@pytest.fixture()
def alice():
    return Identity(name='A', color='hsl(0, 72%, 58%)')


@pytest.fixture()
def bob():
    return Identity(name='B', color='hsl(138, 72%, 58%)')
