import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Database
from app.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings(tmp_path):
    # Use an in-memory SQLite database for testing
    return Settings(
        database_url="sqlite://",
        weather_api_key="test-weather-key",
        route_api_key="test-route-key",
        jwt_secret=TEST_SECRET,
        log_file=str(tmp_path / "test_server.log"),
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


def signup(client, name="Ann", email="ann@x.com", password="pw123456"):
    response = client.post(
        "/api/auth/signup", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
