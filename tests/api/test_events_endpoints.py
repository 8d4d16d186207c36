"""API tests for event stream endpoints.

Tests cover:
- GET /api/v1/events/{event_code}/stream (SSE framing, headers, cleanup)
- GET /api/v1/events/stats

Architecture:
- FastAPI TestClient
- Heartbeat scheduler overridden with ClosingHeartbeats so each stream
  ends right after its acknowledgment
"""

import json

import pytest

from src.core.container import get_heartbeat_scheduler, get_topic_registry
from src.infrastructure.sse import Subscriber
from tests.utils.http import ClosingHeartbeats
from tests.utils.transports import RecordingTransport


def _frames(text: str) -> list[str]:
    return [frame for frame in text.split("\n\n") if frame]


def _data(frame: str) -> dict:
    line = next(line for line in frame.split("\n") if line.startswith("data: "))
    return json.loads(line.removeprefix("data: "))


@pytest.fixture
def heartbeats(app):
    heartbeats = ClosingHeartbeats()
    app.dependency_overrides[get_heartbeat_scheduler] = lambda: heartbeats
    return heartbeats


@pytest.mark.api
class TestEventStream:
    """Test GET /api/v1/events/{event_code}/stream."""

    def test_stream_headers(self, client, heartbeats):
        """Test SSE content type and anti-buffering headers."""
        response = client.get("/api/v1/events/wedding-42/stream")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["x-accel-buffering"] == "no"

    def test_stream_starts_with_retry_then_connected(self, client, heartbeats):
        """Test the retry hint precedes the connected acknowledgment."""
        response = client.get("/api/v1/events/wedding-42/stream")

        frames = _frames(response.text)
        assert frames[0] == "retry: 3000"
        assert "event: connected" in frames[1]
        assert _data(frames[1]) == {"kind": "connected", "topic": "wedding-42"}

    def test_stream_uses_canonical_topic(self, client, heartbeats):
        """Test the event code is normalized to its topic."""
        response = client.get("/api/v1/events/Wedding%2042/stream")

        assert _data(_frames(response.text)[1])["topic"] == "wedding-42"
        assert heartbeats.started[0].topic == "wedding-42"

    def test_stream_end_deregisters_subscriber(self, client, heartbeats):
        """Test the subscriber is removed once the response ends."""
        client.get("/api/v1/events/wedding-42/stream")

        stats = client.get("/api/v1/events/stats").json()

        assert stats["total_connections"] == 0
        assert heartbeats.started[0].is_open is False

    def test_unknown_event_code_returns_404(self, client, heartbeats):
        """Test an unusable event code is rejected before streaming."""
        response = client.get("/api/v1/events/%21%21/stream")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/json")
        assert response.json()["detail"] == "Event not found"
        assert heartbeats.started == []


@pytest.mark.api
class TestConnectionStats:
    """Test GET /api/v1/events/stats."""

    def test_stats_empty(self, client):
        """Test no open streams."""
        response = client.get("/api/v1/events/stats")

        assert response.status_code == 200
        assert response.json() == {
            "total_topics": 0,
            "total_connections": 0,
            "topics": {},
        }

    def test_stats_counts_open_subscribers(self, client):
        """Test registered subscribers are counted per topic."""
        registry = get_topic_registry()
        for topic in ("wedding-42", "wedding-42", "gala"):
            subscriber = Subscriber(topic=topic, transport=RecordingTransport())
            client.portal.call(registry.subscribe, topic, subscriber)

        body = client.get("/api/v1/events/stats").json()

        assert body["total_topics"] == 2
        assert body["total_connections"] == 3
        assert body["topics"] == {"wedding-42": 2, "gala": 1}
