"""
Shared pytest fixtures for the Director OS test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - seeded: demo dataset loaded into the test DB
    - memory_storage / local_store: client-side store on an in-memory backend
    - routed_session: requests-compatible session that forwards to the test client
    - dead_session: requests-compatible session whose every call fails to connect
"""

import pytest
import requests

from director_os import create_app
from director_os.client.local_store import LocalStore
from director_os.client.storage import MemoryStorage
from director_os.models import db as _db

TEST_API_BASE = "http://director-os.test/api"


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def seeded():
    """Load the demo dataset (users u1/u2, pm-1..3, proj-1..4, met-1..4, task-1..4)."""
    from director_os.services.seed import seed_database
    return seed_database()


# ── Client-side fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def memory_storage():
    return MemoryStorage()


@pytest.fixture()
def local_store(memory_storage):
    store = LocalStore(memory_storage)
    store.init()
    return store


class FlaskRoutedSession:
    """Minimal ``requests.Session`` stand-in that serves calls from a Flask test client.

    Lets RemoteGateway talk to the real blueprints without opening a socket.
    """

    def __init__(self, flask_client, base_url=TEST_API_BASE):
        self.flask_client = flask_client
        self.prefix = base_url[: -len("/api")]
        self.calls = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append((method, url))
        path = url[len(self.prefix):]
        resp = self.flask_client.open(path, method=method, headers=headers or {}, json=json)

        result = requests.Response()
        result.status_code = resp.status_code
        result._content = resp.get_data()
        result.encoding = "utf-8"
        result.url = url
        result.reason = resp.status
        return result


class DeadSession:
    """Every request fails like an unreachable host."""

    def __init__(self):
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url))
        raise requests.ConnectionError(f"Connection refused: {url}")


@pytest.fixture()
def routed_session(client):
    return FlaskRoutedSession(client)


@pytest.fixture()
def dead_session():
    return DeadSession()
