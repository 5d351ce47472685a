"""Tests for the HTTP endpoints around the room core."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from services.profanity import ProfanityChecker
from services.topics import TopicSuggester


@pytest.mark.integration
class TestHttpApi:

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "rooms": 0}

    def test_unknown_room_is_404(self, client: TestClient):
        assert client.get("/rooms/nope").status_code == 404
        assert client.get("/rooms/nope/frequencies").status_code == 404

    def test_profanity_check(self, client: TestClient):
        response = client.post("/profanity", json={"message": "cat dog"})
        assert response.status_code == 200
        assert response.json() == {"is_profanity": False, "status": "ok"}

    def test_profanity_check_requires_message(self, client: TestClient):
        assert client.post("/profanity", json={}).status_code == 422

    def test_random_topic(self, client: TestClient):
        response = client.get("/topics/random")
        assert response.status_code == 200
        assert response.json() == {
            "title": "Octopus",
            "summary": "An octopus has eight arms.",
            "prompt": 'What words come to mind when you hear about "Octopus"?',
        }


@pytest.mark.integration
def test_profanity_check_fails_open(tmp_path):
    transport = httpx.MockTransport(lambda request: httpx.Response(502))
    app = create_app(
        profanity_checker=ProfanityChecker(api_url="https://profanity.test", transport=transport),
        static_dir=str(tmp_path / "missing"),
    )
    with TestClient(app) as client:
        response = client.post("/profanity", json={"message": "anything"})

    assert response.json() == {"is_profanity": False, "status": "error"}


@pytest.mark.integration
def test_random_topic_unavailable(tmp_path):
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    app = create_app(
        topic_suggester=TopicSuggester(api_url="https://wiki.test/w/api.php", transport=transport),
        static_dir=str(tmp_path / "missing"),
    )
    with TestClient(app) as client:
        response = client.get("/topics/random")

    assert response.status_code == 503
    assert response.json() == {"detail": "Topic service unavailable"}
