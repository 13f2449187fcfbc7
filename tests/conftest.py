import os

# Must be set before mediahub.core.config builds its settings.
os.environ.setdefault("TELEMETRY_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import httpx
import pytest
import pytest_asyncio

from mediahub.api.v1.endpoints.gdrive import get_access_checker
from mediahub.main import app
from mediahub.services.drive_access import DriveAccessChecker
from mediahub.services.http_client import MediaHttpClient


class DriveStub:
    """
    Stands in for the Drive hosts.

    - ids in `public` answer 200 on every probe
    - ids in `thumbnail_only` answer 200 on the thumbnail service only
    - ids in `sign_in` redirect to the Google sign-in page
    - everything else answers 404
    - `down=True` makes every request fail at the transport level
    """

    def __init__(self):
        self.public: set[str] = set()
        self.thumbnail_only: set[str] = set()
        self.sign_in: set[str] = set()
        self.down = False
        self.requests: list[httpx.Request] = []

    def _object_id(self, request: httpx.Request) -> str:
        if "id" in request.url.params:
            return request.url.params["id"]
        return request.url.path.rstrip("/").rsplit("/", 1)[-1]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)

        if request.url.host == "accounts.google.com":
            return httpx.Response(200, text="<html>Sign in</html>")

        oid = self._object_id(request)
        if oid in self.sign_in:
            return httpx.Response(302, headers={"Location": "https://accounts.google.com/ServiceLogin"})
        if oid in self.public:
            return httpx.Response(200)
        if oid in self.thumbnail_only and request.url.path == "/thumbnail":
            return httpx.Response(200)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def drive():
    return DriveStub()


@pytest_asyncio.fixture
async def checker(drive):
    http = MediaHttpClient(timeout_seconds=5, transport=drive.transport())
    yield DriveAccessChecker(http, user_agent="pytest")
    await http.aclose()


@pytest_asyncio.fixture
async def client(checker):
    """
    HTTP client against the app, with Drive probes served by the stub.
    """
    app.dependency_overrides[get_access_checker] = lambda: checker

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def service_http(checker):
    """
    MediaHttpClient pointed at the app, as the viewer side would use it.
    """
    app.dependency_overrides[get_access_checker] = lambda: checker

    http = MediaHttpClient(base_url="http://test", transport=httpx.ASGITransport(app=app))
    yield http
    await http.aclose()

    app.dependency_overrides.clear()
