"""
Pytest configuration and fixtures for testing.
"""

import copy
import json
import os

# Plain-http TestClient only sends the session cookie back when it is not Secure
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.core.datastore import MallRepository, get_repository
from app.main import app
from app.schemas.user import CurrentUser
from app.services.mall_service import MallService
from app.services.session_service import session_store

SAMPLE_MALLS = [
    {
        "id": 1,
        "name": "City Center Mall",
        "latitude": 25.2854,
        "longitude": 51.5310,
        "isOpen": True,
        "stores": [
            {
                "id": 1,
                "name": "Fashion Forward",
                "type": "Clothing",
                "isOpen": True,
                "opening_hours": "10:00 AM - 10:00 PM",
                "description": "Contemporary fashion",
                "contact": {"phone": "+974 4412 0001", "email": "hi@ff.qa"},
            },
            {
                "id": 2,
                "name": "Tech Hub",
                "type": "Electronics",
                "isOpen": False,
                "opening_hours": "9:00 AM - 11:00 PM",
            },
        ],
    },
    {
        "id": 2,
        "name": "Doha Festival City",
        "latitude": 25.3548,
        "longitude": 51.4326,
        "isOpen": False,
        "stores": [
            {
                "id": 3,
                "name": "Gourmet Corner",
                "type": "Food & Dining",
                "isOpen": False,
                "opening_hours": "11:00 AM - 12:00 AM",
            },
            {
                "id": 4,
                "name": "Book Nook",
                "type": "Books & Media",
                "isOpen": False,
                "opening_hours": "8:00 AM - 10:00 PM",
                "floor": "L2",
            },
        ],
    },
]

DEMO_PASSWORDS = {"admin": "a", "manager": "m", "store": "s"}


class InMemoryRedis:
    """Dict-backed stand-in for the few Redis commands the session store uses."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def setex(self, key, seconds, value):
        self.data[key] = value
        self.ttls[key] = seconds
        return True

    def get(self, key):
        return self.data.get(key)

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                self.ttls.pop(key, None)
                removed += 1
        return removed

    def exists(self, *keys):
        return sum(1 for key in keys if key in self.data)

    def expire(self, key, seconds):
        if key not in self.data:
            return False
        self.ttls[key] = seconds
        return True

    def ping(self):
        return True


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Replace the global session store's Redis client for every test."""
    fake = InMemoryRedis()
    monkeypatch.setattr(session_store, "redis_client", fake)
    return fake


@pytest.fixture
def sample_malls():
    """Fresh copy of the sample dataset."""
    return copy.deepcopy(SAMPLE_MALLS)


@pytest.fixture
def data_file(tmp_path, sample_malls):
    """Sample dataset written to a temporary JSON document."""
    path = tmp_path / "malls.json"
    path.write_text(json.dumps(sample_malls, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def repository(data_file):
    """Repository loaded from the temporary document."""
    repo = MallRepository(data_file)
    repo.load()
    return repo


@pytest.fixture
def mall_service(repository):
    """Mall service over the temporary repository."""
    return MallService(repository)


@pytest.fixture
def admin():
    return CurrentUser(username="admin", role="admin")


@pytest.fixture
def manager():
    return CurrentUser(username="manager", role="manager")


@pytest.fixture
def store_user():
    return CurrentUser(username="store", role="store")


@pytest.fixture
def read_document():
    """Return a reader decoding the JSON document currently on disk."""
    def _read(path):
        return json.loads(path.read_text(encoding="utf-8"))
    return _read


@pytest.fixture(scope="function")
def client(repository):
    """Create a test client bound to the temporary repository."""
    app.dependency_overrides[get_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client, username, password=None):
    """Log in through the API and return bearer headers for the session."""
    response = client.post(
        "/api/auth/login",
        json={"username": username, "password": password or DEMO_PASSWORDS[username]},
    )
    assert response.status_code == 200, response.text
    # Drop the cookie so requests authenticate only through the header
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def login_as(client):
    """Return a helper logging the client in as a demo user."""
    return lambda username, password=None: login(client, username, password)


@pytest.fixture
def admin_headers(client):
    return login(client, "admin")


@pytest.fixture
def manager_headers(client):
    return login(client, "manager")


@pytest.fixture
def store_headers(client):
    return login(client, "store")
