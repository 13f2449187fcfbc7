import pytest

from mediahub.core.config import settings
from mediahub.main import app
from mediahub.services.rate_limit import RateLimitResult, get_limiter


@pytest.mark.asyncio
async def test_check_access_public_file(client, drive):
    drive.public.add("ABC123")

    r = await client.post("/v1/gdrive/check-access", json={"url": "https://drive.google.com/file/d/ABC123/view"})

    assert r.status_code == 200, r.text
    assert r.json() == {"accessible": True, "isFolder": False, "fileId": "ABC123"}


@pytest.mark.asyncio
async def test_check_access_public_folder(client, drive):
    drive.public.add("XYZ789")

    r = await client.post("/v1/gdrive/check-access", json={"url": "https://drive.google.com/folders/XYZ789"})

    assert r.status_code == 200, r.text
    assert r.json() == {"accessible": True, "isFolder": True, "fileId": "XYZ789"}


@pytest.mark.asyncio
async def test_check_access_private_file(client):
    r = await client.post("/v1/gdrive/check-access", json={"url": "https://drive.google.com/file/d/PRIV/view"})

    assert r.status_code == 200
    assert r.json()["accessible"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}])
async def test_check_access_requires_url(client, body):
    r = await client.post("/v1/gdrive/check-access", json=body)
    assert r.status_code == 400
    assert r.json()["detail"] == "URL is required"


@pytest.mark.asyncio
async def test_check_access_rejects_non_drive_links(client, drive):
    r = await client.post("/v1/gdrive/check-access", json={"url": "https://example.com/file/d/ABC/view"})

    assert r.status_code == 400
    assert r.json() == {"accessible": False, "message": "Invalid Google Drive URL format"}
    assert drive.requests == []


@pytest.mark.asyncio
async def test_check_access_without_id(client):
    r = await client.post("/v1/gdrive/check-access", json={"url": "https://drive.google.com/open?id="})

    assert r.status_code == 400
    assert r.json()["message"] == "Could not extract file ID from URL"


@pytest.mark.asyncio
async def test_media_url_single_image(client):
    r = await client.post("/v1/gdrive/media-url", json={"url": "https://drive.google.com/file/d/ABC123/view", "fileId": "ABC123"})

    assert r.status_code == 200, r.text
    data = r.json()
    assert data["type"] == "single"
    assert data["count"] == 1
    assert data["files"] == [{
        "id": "ABC123",
        "name": "Image ABC123",
        "url": "https://drive.google.com/uc?export=view&id=ABC123",
        "type": "image",
        "mimeType": "image/jpeg",
    }]


@pytest.mark.asyncio
async def test_media_url_respects_requested_video(client):
    r = await client.post("/v1/gdrive/media-url", json={"url": "https://drive.google.com/file/d/V1/view", "mediaType": "video"})

    f = r.json()["files"][0]
    assert f["type"] == "video"
    assert f["mimeType"] == "video/mp4"
    assert f["url"] == "https://drive.google.com/file/d/V1/preview"


@pytest.mark.asyncio
async def test_media_url_guesses_video_from_link(client):
    r = await client.post("/v1/gdrive/media-url", json={"url": "https://drive.google.com/file/d/V2/view?title=clip.mp4", "mediaType": "auto"})
    assert r.json()["files"][0]["type"] == "video"


@pytest.mark.asyncio
async def test_media_url_by_file_id_only(client):
    r = await client.post("/v1/gdrive/media-url", json={"fileId": "ONLYID"})

    assert r.status_code == 200
    assert r.json()["files"][0]["id"] == "ONLYID"


@pytest.mark.asyncio
async def test_media_url_folder_returns_guidance(client):
    r = await client.post("/v1/gdrive/media-url", json={"url": "https://drive.google.com/drive/folders/DIR1", "fileId": "DIR1"})

    assert r.status_code == 200
    data = r.json()
    assert data["type"] == "folder"
    assert data["files"] == []
    assert data["count"] == 0
    assert data["isFolder"] is True
    assert data["folderUrl"] == "https://drive.google.com/drive/folders/DIR1"
    assert "individual file links" in data["message"]


@pytest.mark.asyncio
async def test_media_url_validation_errors(client):
    r = await client.post("/v1/gdrive/media-url", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "File ID or URL is required"

    r = await client.post("/v1/gdrive/media-url", json={"url": "/img/local.png"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Could not extract file ID"


class _CountingLimiter:
    """Fixed window without Redis: allows `limit` calls per key."""

    def __init__(self):
        self.counts: dict[str, int] = {}
        self.keys = []

    async def allow(self, *, key, limit, window_seconds):
        self.keys.append(key)
        self.counts[key] = self.counts.get(key, 0) + 1
        n = self.counts[key]
        return RateLimitResult(allowed=n <= limit, remaining=max(0, limit - n), reset_seconds=42)


@pytest.fixture
def limiter(monkeypatch):
    limiter = _CountingLimiter()
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(settings, "rate_limit_per_minute", 1)
    app.dependency_overrides[get_limiter] = lambda: limiter
    return limiter


@pytest.mark.asyncio
async def test_rate_limited_requests_get_429(client, limiter):
    assert (await client.post("/v1/gdrive/media-url", json={"fileId": "X"})).status_code == 200

    r = await client.post("/v1/gdrive/media-url", json={"fileId": "X"})

    assert r.status_code == 429
    assert r.headers["Retry-After"] == "42"
    assert limiter.keys == ["gdrive:127.0.0.1", "gdrive:127.0.0.1"]

    # health is not rate limited
    assert (await client.get("/v1/health")).status_code == 200


@pytest.mark.asyncio
async def test_rotating_forwarded_for_does_not_reset_the_limit(client, limiter):
    codes = []
    for i in range(5):
        r = await client.post(
            "/v1/gdrive/media-url",
            json={"fileId": "X"},
            headers={"X-Forwarded-For": f"203.0.113.{i}"},
        )
        codes.append(r.status_code)

    assert codes == [200, 429, 429, 429, 429]
    assert set(limiter.keys) == {"gdrive:127.0.0.1"}


@pytest.mark.asyncio
async def test_forwarded_for_is_used_behind_a_trusted_proxy(client, limiter, monkeypatch):
    monkeypatch.setattr(settings, "trust_forwarded_for", True)

    r = await client.post(
        "/v1/gdrive/media-url",
        json={"fileId": "X"},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
    )

    assert r.status_code == 200
    assert limiter.keys == ["gdrive:203.0.113.7"]
