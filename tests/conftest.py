"""
Shared fixtures: small hand-made puzzles, an in-memory remote result
service, and a Flask app wired to mongomock and a canned upstream feed.
"""

import mongomock
import pytest

from puzzlehub import create_app
from puzzlehub.config import TestingConfig
from puzzlehub.exceptions import UpstreamUnavailable
from puzzlehub.models.game import GameKind, WordKind
from puzzlehub.models.puzzle import parse_connections_puzzle, parse_strands_puzzle, WordlePuzzle
from puzzlehub.services import stats_service
from puzzlehub.services.auth_service import initialize_auth_service
from puzzlehub.services.puzzle_service import initialize_puzzle_service
from puzzlehub.services.result_service import initialize_result_service
from puzzlehub.storage import LocalStore, MemoryKeyValueStore

DATE = '2024-06-01'
UPSTREAM = 'https://upstream.test/svc'

CONNECTIONS_PAYLOAD = {
    'status': 'OK',
    'print_date': DATE,
    'categories': [
        {'title': 'FISH', 'cards': [
            {'content': 'BASS', 'position': 0}, {'content': 'PIKE', 'position': 5},
            {'content': 'SOLE', 'position': 10}, {'content': 'CARP', 'position': 15}]},
        {'title': 'PLANETS', 'cards': [
            {'content': 'MARS', 'position': 1}, {'content': 'VENUS', 'position': 6},
            {'content': 'SATURN', 'position': 11}, {'content': 'PLUTO', 'position': 12}]},
        {'title': 'COLORS', 'cards': [
            {'content': 'RED', 'position': 2}, {'content': 'TEAL', 'position': 7},
            {'content': 'CYAN', 'position': 8}, {'content': 'PINK', 'position': 13}]},
        {'title': 'DOGS', 'cards': [
            {'content': 'PUG', 'position': 3}, {'content': 'LAB', 'position': 4},
            {'content': 'BOXER', 'position': 9}, {'content': 'HUSKY', 'position': 14}]},
    ],
}

STRANDS_PAYLOAD = {
    'status': 'OK',
    'printDate': DATE,
    'clue': 'Pets',
    'startingBoard': ['CATS', 'DOGX', 'BIRD'],
    'themeWords': ['CAT', 'DOG'],
    'spangram': 'BIRD',
}

WORDLE_PAYLOAD = {'status': 'OK', 'print_date': DATE, 'solution': 'crate'}

UPSTREAM_PAYLOADS = {
    f'{UPSTREAM}/wordle/v2/{DATE}.json': WORDLE_PAYLOAD,
    f'{UPSTREAM}/connections/v2/{DATE}.json': CONNECTIONS_PAYLOAD,
    f'{UPSTREAM}/strands/v2/{DATE}.json': STRANDS_PAYLOAD,
}


@pytest.fixture
def wordle_puzzle():
    return WordlePuzzle(date=DATE, solution='crate')


@pytest.fixture
def connections_puzzle():
    return parse_connections_puzzle(CONNECTIONS_PAYLOAD)


@pytest.fixture
def strands_puzzle():
    return parse_strands_puzzle(STRANDS_PAYLOAD)


@pytest.fixture
def store():
    return LocalStore(MemoryKeyValueStore())


class FakeClassifier:
    """Word-check service answering from the canned answer key."""

    def __init__(self):
        self.calls = []

    async def classify_word(self, date, word):
        self.calls.append(word)
        if word == STRANDS_PAYLOAD['spangram']:
            return WordKind.SPANGRAM
        if word in STRANDS_PAYLOAD['themeWords']:
            return WordKind.THEME
        return WordKind.OTHER


@pytest.fixture
def classifier():
    return FakeClassifier()


class FakeRemote:
    """
    In-memory remote result service.

    ``fail_after`` makes every call after that many successful writes raise
    UpstreamUnavailable; ``down`` fails everything.
    """

    def __init__(self):
        self.calls = []
        self.progress = {}
        self.counters = {game: {} for game in GameKind}
        self.down = False
        self.fail_after = None

    def _check(self):
        if self.down:
            raise UpstreamUnavailable("remote down", status=503)
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise UpstreamUnavailable("remote down", status=503)

    async def get_progress(self, game, date):
        if self.down:
            raise UpstreamUnavailable("remote down", status=503)
        return self.progress.get((game, date))

    async def set_progress(self, snapshot):
        self._check()
        self.calls.append(('set_progress', snapshot))
        self.progress[(snapshot.game, snapshot.date)] = snapshot

    async def record_result(self, event):
        self._check()
        self.calls.append(('record_result', event))
        self.counters[event.game] = stats_service.apply_event(self.counters[event.game], event)

    async def get_stats(self, game):
        if self.down:
            raise UpstreamUnavailable("remote down", status=503)
        return {'success': True, 'counters': dict(self.counters[game])}


@pytest.fixture
def remote():
    return FakeRemote()


class FakeUpstream:
    def __init__(self):
        self.requests = []
        self.payloads = dict(UPSTREAM_PAYLOADS)

    def __call__(self, url):
        self.requests.append(url)
        if url not in self.payloads:
            raise UpstreamUnavailable("Upstream error", status=404)
        return self.payloads[url]


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def app(upstream):
    db = mongomock.MongoClient()[TestingConfig.MONGO_DB_NAME]
    initialize_auth_service(db, TestingConfig.JWT_SECRET, TestingConfig.JWT_EXPIRATION_DAYS)
    initialize_result_service(db)
    initialize_puzzle_service(UPSTREAM, fetch_json=upstream)
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    client.post('/api/auth/register', json={'username': 'player1', 'password': 'secret123'})
    resp = client.post('/api/auth/login', json={'username': 'player1', 'password': 'secret123'})
    return {'Authorization': f"Bearer {resp.get_json()['token']}"}
