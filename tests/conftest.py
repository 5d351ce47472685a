"""Pytest configuration and shared fixtures."""

import json
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from backend import RoomRegistry
from exceptions import DeliveryFailure
from services.broadcaster import Broadcaster
from services.gateway import ConnectionGateway
from services.ledger import WordLedger
from services.membership import MembershipManager
from services.profanity import ProfanityChecker
from services.topics import TopicSuggester


class FakeConnection:
    """Stands in for services.connection.Connection, recording every frame."""

    def __init__(self, connection_id: str):
        self.id = connection_id
        self.sent: List[str] = []

    def send(self, payload: str):
        self.sent.append(payload)

    @property
    def events(self) -> List[dict]:
        return [json.loads(payload) for payload in self.sent]

    @property
    def last_event(self) -> dict:
        return self.events[-1]


class BrokenConnection(FakeConnection):
    def send(self, payload: str):
        raise DeliveryFailure(f"Connection {self.id} is closed")


@pytest.fixture
def make_connection():
    def _make(connection_id: str = "conn") -> FakeConnection:
        return FakeConnection(connection_id)
    return _make


@pytest.fixture
def broken_connection() -> BrokenConnection:
    return BrokenConnection("broken")


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry()


@pytest.fixture
def broadcaster() -> Broadcaster:
    return Broadcaster()


@pytest.fixture
def membership(registry, broadcaster) -> MembershipManager:
    return MembershipManager(registry, broadcaster)


@pytest.fixture
def ledger(registry, broadcaster) -> WordLedger:
    return WordLedger(registry, broadcaster)


@pytest.fixture
def gateway(membership, ledger) -> ConnectionGateway:
    return ConnectionGateway(membership, ledger)


def profanity_transport(is_profanity: bool = False, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"isProfanity": is_profanity})
    return httpx.MockTransport(handler)


def wikipedia_handler(title: str = "Octopus", extract: str = "An octopus has eight arms."):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("list") == "random":
            return httpx.Response(200, json={"query": {"random": [{"id": 1, "ns": 0, "title": title}]}})
        return httpx.Response(200, json={"query": {"pages": {"42": {"pageid": 42, "title": title, "extract": extract}}}})
    return handler


def wikipedia_transport(title: str = "Octopus", extract: str = "An octopus has eight arms.") -> httpx.MockTransport:
    return httpx.MockTransport(wikipedia_handler(title, extract))


@pytest.fixture
def app(tmp_path):
    return create_app(
        profanity_checker=ProfanityChecker(api_url="https://profanity.test", transport=profanity_transport()),
        topic_suggester=TopicSuggester(api_url="https://wiki.test/w/api.php", transport=wikipedia_transport()),
        static_dir=str(tmp_path / "missing"),
    )


@pytest.fixture
def client(app):
    # Entering the client keeps every WebSocket session on one event loop
    with TestClient(app) as test_client:
        yield test_client
