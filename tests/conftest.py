"""Shared pytest fixtures."""

import pytest

from missioncontrol.app import App
from missioncontrol.config import Config
from missioncontrol.core.modules.session.models import AuthToken

VALID_USER = {"email": "a@test.com", "password": "abcdef12", "name_first": "Ann", "name_last": "Lee"}
OTHER_USER = {"email": "b@test.com", "password": "qwerty99", "name_first": "Bob", "name_last": "Ray"}
VALID_ASTRONAUT = {"name_first": "Jim", "name_last": "Kirk", "rank": "Captain", "age": 35, "weight": 75, "height": 180}


@pytest.fixture
def config():
    """In-memory configuration with a cheap bcrypt cost."""
    return Config(database_url=None, debug=True, session_ttl_hours=2, bcrypt_rounds=4)


@pytest.fixture
async def app(config):
    """Started application with no durable snapshot."""
    app = App(config)
    async with app.lifespan():
        yield app


@pytest.fixture
async def token(app) -> AuthToken:
    """Session token of a freshly registered control user."""
    registration = await app.register(**VALID_USER)
    return AuthToken(registration.auth_token)


@pytest.fixture
async def other_token(app) -> AuthToken:
    """Session token of a second control user."""
    registration = await app.register(**OTHER_USER)
    return AuthToken(registration.auth_token)


@pytest.fixture
async def astronaut_id(app, token) -> int:
    return await app.create_astronaut(token, **VALID_ASTRONAUT)


@pytest.fixture
async def mission_id(app, token) -> int:
    return await app.create_mission(token, "Mars Run", "desc", "Mars")
