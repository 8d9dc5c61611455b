import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from waitlist.client.api import QueueClient
from waitlist.config import Settings
from waitlist.database import build_engine, build_session_maker, init_db
from waitlist.main import create_app
from waitlist.services.notifier import get_notifier
from waitlist.services.queue_service import QueueService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "password123"


class RecordingNotifier:
    """Stands in for the Socket.IO notifier and remembers what was published."""

    def __init__(self):
        self.events = []

    async def publish(self, event):
        self.events.append(event)

    @property
    def actions(self):
        return [e.action for e in self.events]


class FakeSocket:
    """Minimal socketio.AsyncClient replacement."""

    def __init__(self):
        self.handlers = {}
        self.connected_to = None

    def on(self, event, handler):
        self.handlers[event] = handler

    async def connect(self, url):
        self.connected_to = url

    async def disconnect(self):
        self.connected_to = None

    async def fire(self, event, *args):
        await self.handlers[event](*args)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        db_dir=str(tmp_path / "data"),
        database_url=None,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        jwt_secret_key="test-secret",
        admin_token_expire_minutes=5,
    )


@pytest_asyncio.fixture
async def session(settings):
    engine = build_engine(settings)
    await init_db(engine)
    session_maker = build_session_maker(engine)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def service(session):
    return QueueService(session)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(settings, notifier):
    app = create_app(settings)
    app.dependency_overrides[get_notifier] = lambda: notifier
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"X-Admin-Token": response.json()["token"]}


@pytest_asyncio.fixture
async def api_client(app):
    """QueueClient talking to the app in-process, lifespan included."""
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with QueueClient("http://testserver", transport=transport) as api_client:
            yield api_client
