import itertools
import os
import random
import sys
import pytest

# Ensure the backend root (containing the `pong` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from pong import create_app, socketio
from pong.registry import registry
from pong.services.match import ManualTicker, Match


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    TICK_RATE_HZ = 60
    DEFAULT_MAX_SCORE = 5
    CORS_ORIGINS = '*'
    ENABLE_TICKER_IN_TESTS = False


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed cycle of values."""

    def __init__(self, values):
        super().__init__(0)
        self._values = itertools.cycle(values)

    def random(self):
        return next(self._values)


# random() > 0.5 draws +1, anything else draws -1; x is drawn before y
RIGHT_UP = (0.9, 0.1)
RIGHT_DOWN = (0.9, 0.9)
LEFT_UP = (0.1, 0.1)


class RecordingBroadcaster:
    def __init__(self):
        self.states = []
        self.logs = []
        self.winners = []
        # Set to make every state/log delivery raise, as a broken transport would
        self.fail = False

    def _check(self):
        if self.fail:
            raise RuntimeError('emit failed')

    def state(self, game_id, snapshot):
        self._check()
        self.states.append(snapshot)

    def log(self, game_id, message):
        self._check()
        self.logs.append(message)

    def game_over(self, game_id, winner):
        self.winners.append(winner)


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def make_match(broadcaster):
    def _make(max_score=3, orientation=RIGHT_UP, start=True):
        match = Match(
            'G1',
            'Alice',
            max_score,
            broadcaster=broadcaster,
            ticker=ManualTicker(),
            rng=ScriptedRandom(orientation),
            player1_sid='sid-alice',
        )
        match.announce()
        if start:
            match.attach_player('Bob', sid='sid-bob')
        return match
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    registry.clear()
    with application.app_context():
        yield application
    registry.clear()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    yield test_client
    try:
        if test_client.is_connected():
            test_client.disconnect()
    except Exception:
        pass
