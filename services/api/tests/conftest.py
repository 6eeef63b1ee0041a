"""Shared fixtures for the API tests.

The provider and the IP echo service are replaced by `FakeUpstream` (see
`fakes.py`); no test touches the network.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.gateway import BrawlStarsGateway
from app.main import create_app
from app.settings import Settings
from app.store import GoalStore

from fakes import API_HOST, CLUB_PATH, CLUB_PAYLOAD, IP_HOST, PLAYER_PAYLOAD, FakeUpstream


@pytest.fixture
def upstream():
    fake = FakeUpstream()
    fake.set(API_HOST, CLUB_PATH, json=CLUB_PAYLOAD)
    fake.set(API_HOST, "/v1/players/%23ABC123", json=PLAYER_PAYLOAD)
    fake.set(IP_HOST, "/", json={"ip": "203.0.113.7"})
    return fake


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        brawl_api_key="test-key",
        club_tag="#CLUB1",
        goals_file=str(tmp_path / "metas.json"),
    )


@pytest.fixture
def gateway(settings, upstream):
    gw = BrawlStarsGateway.from_settings(settings, transport=httpx.MockTransport(upstream))
    yield gw
    gw.close()


@pytest.fixture
def store(settings):
    return GoalStore(settings.goals_file)


@pytest.fixture
def client(settings, gateway, store):
    app = create_app(settings=settings, gateway=gateway, store=store)
    with TestClient(app) as c:
        yield c
