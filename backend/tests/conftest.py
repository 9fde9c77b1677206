# backend/tests/conftest.py
import os, sys, pathlib, pytest
import httpx
from fastapi.testclient import TestClient

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]   # .../backend

# Make `from admin_stats.*` importable without installing the package
sys.path.insert(0, str(BACKEND_DIR))

UPSTREAM_URL = "http://stats.test"
os.environ.setdefault("STATS_API_BASE_URL", UPSTREAM_URL)

OVERALL_PATH = "/admin/statistics/overall"
TEAMS_PATH = "/admin/statistics/teams"
DAILY_PATH = "/admin/statistics/daily"
MY_TEAM_PATH = "/team/statistics"
MY_TEAM_SHIPMENTS_PATH = "/team/statistics/shipments"


class FakeUpstream:
    """Canned upstream answers keyed by URL path; remembers every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def set(self, path: str, body=None, status: int = 200):
        self.routes[path] = (status, body)

    def fail(self, path: str, exc: Exception):
        self.routes[path] = (None, exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, {"message": "Not Found"}))
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status, json=body)

    def calls(self, path: str):
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture()
def upstream():
    return FakeUpstream()

@pytest.fixture()
def api_client(upstream):
    from admin_stats.clients.statistics_api import StatisticsAPIClient
    return StatisticsAPIClient(
        base_url=UPSTREAM_URL,
        token=None,
        transport=httpx.MockTransport(upstream.handler),
    )

@pytest.fixture()
def service(api_client):
    from admin_stats.services.stats_service import StatsService
    return StatsService(client=api_client, stale_seconds=60, cache_size=16)

@pytest.fixture()
def client(service):
    from admin_stats.main import app
    from admin_stats.services.stats_service import get_stats_service
    app.dependency_overrides[get_stats_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
