"""
Test the HTTP surface end to end with fake external systems
"""
import functools

import httpx
import pytest
from fastapi.testclient import TestClient

from vseo import create_app
from vseo.config import Config
from vseo.services.pipeline import VideoPipeline
from vseo.services.webhook_service import send_to_webhook
from vseo.utils.exceptions import OptimizationError
from fakes import FakeDownloader, FakeMetadata, FakeOptimizer, FakeTranscriber, FakeWebhook


@pytest.fixture
def fakes():
    return dict(
        download_audio=FakeDownloader(),
        fetch_metadata=FakeMetadata(),
        transcribe=FakeTranscriber(),
        optimize=FakeOptimizer(),
        send_webhook=FakeWebhook(),
    )


def make_client(scratch_root, fakes, **overrides):
    components = {**fakes, **overrides}
    pipeline = VideoPipeline(scratch_root=str(scratch_root), **components)
    return TestClient(create_app(pipeline=pipeline))


def test_health(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["uptime"] >= 0
    assert "memory" in body
    assert "timestamp" in body
    assert "environment" in body


def test_index_lists_endpoints(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    body = client.get("/").json()
    assert body["status"] == "running"
    assert body["endpoints"]["processVideo"].startswith("/api/process-video")
    assert body["endpoints"]["optimizeContent"].startswith("/api/optimize-content")


def test_web_app_page(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.get("/app")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")


def test_transcribe_youtube(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/transcribe-youtube", json={
        "youtubeUrl": "https://youtu.be/abc123",
        "whisperApiKey": "sk-test",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["transcription"] == "hello from the video"
    assert body["videoId"] == "abc123"
    assert body["audioSize"].endswith("MB")
    assert list(scratch_root.iterdir()) == []


def test_transcribe_youtube_invalid_url(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/transcribe-youtube", json={
        "youtubeUrl": "https://example.com/video",
        "whisperApiKey": "sk-test",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid YouTube URL"}
    assert fakes["download_audio"].calls == []


def test_process_video_missing_webhook_url(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/process-video", json={
        "youtubeUrl": "https://youtu.be/abc123",
        "whisperApiKey": "sk-test",
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: youtubeUrl, whisperApiKey, or n8nWebhookUrl"}
    assert fakes["download_audio"].calls == []


def test_process_video_success(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/process-video", json={
        "youtubeUrl": "https://www.youtube.com/watch?v=abc123",
        "whisperApiKey": "sk-test",
        "n8nWebhookUrl": "https://n8n.example.com/webhook/seo",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["videoId"] == "abc123"
    assert body["metadata"]["title"] == "Old title"
    assert body["n8nResponse"] == {"received": True}
    assert "n8n workflow" in body["message"]


def test_process_video_webhook_failure(scratch_root, fakes):
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    client = make_client(
        scratch_root, fakes,
        send_webhook=functools.partial(send_to_webhook, transport=transport),
    )
    response = client.post("/api/process-video", json={
        "youtubeUrl": "https://youtu.be/abc123",
        "whisperApiKey": "sk-test",
        "n8nWebhookUrl": "https://n8n.example.com/webhook/seo",
    })
    assert response.status_code == 500
    body = response.json()
    assert "503" in body["error"]
    assert body["videoId"] == "abc123"
    assert not fakes["download_audio"].created[0].exists()
    assert list(scratch_root.iterdir()) == []


def test_optimize_content_returns_model_object(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/optimize-content", json={
        "transcription": "today we talk about seo",
        "chatGptApiKey": "sk-chat",
        "youtubeUrl": "https://youtu.be/abc123",
    })
    assert response.status_code == 200
    assert response.json() == fakes["optimize"].result


def test_optimize_content_missing_key(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/optimize-content", json={"transcription": "text"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: transcription or chatGptApiKey"}


def test_optimize_content_failure(scratch_root, fakes):
    client = make_client(
        scratch_root, fakes,
        optimize=FakeOptimizer(error=OptimizationError("Content optimization failed: Failed to parse ChatGPT response as JSON")),
    )
    response = client.post("/api/optimize-content", json={"transcription": "text", "chatGptApiKey": "sk"})
    assert response.status_code == 500
    assert "Failed to parse ChatGPT response as JSON" in response.json()["error"]


def test_optimize_content_metadata_failure_still_succeeds(scratch_root, fakes):
    client = make_client(scratch_root, fakes, fetch_metadata=FakeMetadata(error=RuntimeError("yt-dlp missing")))
    response = client.post("/api/optimize-content", json={
        "transcription": "text",
        "chatGptApiKey": "sk",
        "youtubeUrl": "https://youtu.be/abc123",
    })
    assert response.status_code == 200
    assert fakes["optimize"].calls[0][1] is None


def test_transcribe_audio_upload(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post(
        "/api/transcribe-audio",
        files={"audio": ("talk.mp3", b"ID3" + b"\0" * 1021, "audio/mpeg")},
        data={"whisperApiKey": "sk-test"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["transcription"] == "hello from the video"
    assert body["fileInfo"] == {"originalName": "talk.mp3", "size": 1024, "type": "audio/mpeg"}
    assert list(scratch_root.iterdir()) == []


def test_transcribe_audio_missing_key_removes_upload(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post(
        "/api/transcribe-audio",
        files={"audio": ("talk.mp3", b"ID3" + b"\0" * 100, "audio/mpeg")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing whisperApiKey"}
    assert fakes["transcribe"].calls == []
    assert list(scratch_root.iterdir()) == []


def test_transcribe_audio_without_file(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post("/api/transcribe-audio", data={"whisperApiKey": "sk-test"})
    assert response.status_code == 400
    assert response.json() == {"error": "No audio file provided"}


def test_malformed_json_body(scratch_root, fakes):
    client = make_client(scratch_root, fakes)
    response = client.post(
        "/api/transcribe-youtube",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_rate_limit(scratch_root, fakes, monkeypatch):
    monkeypatch.setattr(Config, "RATE_LIMIT", "2/minute")
    client = make_client(scratch_root, fakes)
    assert client.get("/api/health").status_code == 200
    assert client.get("/api/health").status_code == 200
    response = client.get("/api/health")
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded"}


def test_rate_limit_applies_to_api_routes(scratch_root, fakes, monkeypatch):
    monkeypatch.setattr(Config, "RATE_LIMIT", "1/minute")
    client = make_client(scratch_root, fakes)
    body = {"youtubeUrl": "https://youtu.be/abc123", "whisperApiKey": "sk-test"}
    assert client.post("/api/transcribe-youtube", json=body).status_code == 200
    response = client.post("/api/transcribe-youtube", json=body)
    assert response.status_code == 429
    assert len(fakes["download_audio"].calls) == 1


def test_transcribe_audio_upload_too_large(scratch_root, fakes, monkeypatch):
    monkeypatch.setattr(Config, "MAX_UPLOAD_BYTES", 100)
    monkeypatch.setattr(Config, "UPLOAD_CHUNK_SIZE", 64)
    client = make_client(scratch_root, fakes)
    response = client.post(
        "/api/transcribe-audio",
        files={"audio": ("talk.mp3", b"\0" * 1024, "audio/mpeg")},
        data={"whisperApiKey": "sk-test"},
    )
    assert response.status_code == 413
    assert "too large" in response.json()["error"]
    assert fakes["transcribe"].calls == []
    assert list(scratch_root.iterdir()) == []
