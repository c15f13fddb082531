import pytest
from fastapi.testclient import TestClient

from user_api.core.config import Settings
from user_api.main import create_app

TEST_JWT_SECRET = 'test-signing-secret-that-is-long-enough-for-hs256'


@pytest.fixture
def database_path(tmp_path):
    return tmp_path / 'users.db'


@pytest.fixture
def settings(database_path) -> Settings:
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        database_url=f'sqlite+aiosqlite:///{database_path}',
        db_tablename='users',
        db_auto_create=True,
        bcrypt_rounds=4,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def make_user_payload(**overrides) -> dict:
    payload = {
        'name': 'Ada Lovelace',
        'email': 'ada@example.com',
        'phone': '555-0100',
        'password': 'analytical-engine',
        'role': 'admin',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def user_payload():
    return make_user_payload


@pytest.fixture
def auth_headers(client) -> dict:
    payload = make_user_payload(email='operator@example.com')
    assert client.post('/register', json=payload).status_code == 201
    response = client.post('/login', json={'email': payload['email'], 'password': payload['password']})
    return {'Authorization': f"Bearer {response.json()['token']}"}
