# backend/tests/test_statistics_api.py
import httpx
from fastapi.testclient import TestClient

from conftest import (
    DAILY_PATH,
    MY_TEAM_PATH,
    MY_TEAM_SHIPMENTS_PATH,
    OVERALL_PATH,
    TEAMS_PATH,
    FakeUpstream,
)

RANGE_QS = "from=2024-03-01&to=2024-03-02"

def _seed(upstream: FakeUpstream):
    upstream.set(OVERALL_PATH, {"data": {"overview": {"total_orders": "10", "total_revenue_vnd": 500000}}})
    upstream.set(TEAMS_PATH, [{"team_code": f"T{i}", "total_revenue_vnd": i * 1000, "total_orders": i} for i in range(1, 9)])
    upstream.set(DAILY_PATH, {"revenueByDay": [
        {"date": "2024-03-02", "revenue": 200000},
        {"date": "2024-03-01", "revenue": 300000},
    ]})


def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_both_statistics_routers_mounted(client: TestClient):
    paths = {route.path for route in client.app.routes}
    assert {"/api/admin/statistics", "/api/admin/statistics/refetch", "/api/team/statistics"} <= paths

def test_admin_statistics_normalized(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    r = client.get(f"/api/admin/statistics?{RANGE_QS}")
    assert r.status_code == 200
    data = r.json()

    assert data["params"] == {"from": "2024-03-01T00:00:00+07:00", "to": "2024-03-02T23:59:59+07:00"}
    assert data["overview"]["totalOrders"] == 10
    assert data["overview"]["totalRevenue"] == 500000
    assert data["revenueByDay"] == [
        {"date": "2024-03-01", "revenue": 300000, "orders": 0},
        {"date": "2024-03-02", "revenue": 200000, "orders": 0},
    ]
    # top 6 by default, highest revenue first
    assert [t["team"] for t in data["teamBreakdown"]] == ["T8", "T7", "T6", "T5", "T4", "T3"]
    assert data["isError"] is False and data["error"] is None
    assert data["isLoading"] is False and data["isFetching"] is False
    assert [k["display"] for k in data["kpis"]][:2] == ["500.000 đ", "10"]
    # integer counts stay integers on the wire
    total_orders = next(k for k in data["kpis"] if k["key"] == "total_orders")
    assert total_orders["value"] == 10 and isinstance(total_orders["value"], int)

def test_params_forwarded_to_every_endpoint(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    client.get(f"/api/admin/statistics?{RANGE_QS}", headers={"Authorization": "Bearer admin-token"})
    for path in (OVERALL_PATH, TEAMS_PATH, DAILY_PATH):
        (req,) = upstream.calls(path)
        assert req.url.params["from"] == "2024-03-01T00:00:00+07:00"
        assert req.url.params["to"] == "2024-03-02T23:59:59+07:00"
        assert req.headers["authorization"] == "Bearer admin-token"

def test_team_limit(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    r = client.get(f"/api/admin/statistics?{RANGE_QS}&teamLimit=2")
    assert [t["team"] for t in r.json()["teamBreakdown"]] == ["T8", "T7"]

def test_partial_data_when_one_endpoint_fails(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    upstream.set(DAILY_PATH, {"message": "boom"}, status=500)
    r = client.get(f"/api/admin/statistics?{RANGE_QS}")
    assert r.status_code == 200
    data = r.json()
    assert data["isError"] is True
    assert data["error"]["status"] == 500
    assert data["revenueByDay"] == []
    assert data["overview"]["totalRevenue"] == 500000
    assert len(data["teamBreakdown"]) == 6

def test_error_precedence_and_transport_failures(client: TestClient, upstream: FakeUpstream):
    upstream.set(OVERALL_PATH, {"data": {}})
    upstream.fail(TEAMS_PATH, httpx.ConnectError("connection refused"))
    upstream.set(DAILY_PATH, "not used", status=503)
    data = client.get(f"/api/admin/statistics?{RANGE_QS}").json()
    assert data["isError"] is True
    # team is reported before daily
    assert data["error"]["status"] is None
    assert "connection refused" in data["error"]["message"]
    assert data["overview"] == {"totalOrders": 0, "totalRevenue": 0, "averageOrderValue": 0, "successRate": 0}

def test_results_are_cached_until_refetch(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    client.get(f"/api/admin/statistics?{RANGE_QS}")
    client.get(f"/api/admin/statistics?{RANGE_QS}")
    assert len(upstream.requests) == 3

    upstream.set(OVERALL_PATH, {"totalOrders": 11})
    r = client.post(f"/api/admin/statistics/refetch?{RANGE_QS}")
    assert r.status_code == 200
    assert r.json()["overview"]["totalOrders"] == 11
    assert len(upstream.requests) == 6
    for path in (OVERALL_PATH, TEAMS_PATH, DAILY_PATH):
        assert len(upstream.calls(path)) == 2

def test_new_range_fetches_again(client: TestClient, upstream: FakeUpstream):
    _seed(upstream)
    client.get(f"/api/admin/statistics?{RANGE_QS}")
    client.get("/api/admin/statistics?from=2024-03-01&to=2024-03-03")
    assert len(upstream.calls(OVERALL_PATH)) == 2

def test_invalid_parameters(client: TestClient, upstream: FakeUpstream):
    assert client.get("/api/admin/statistics?range=90d").status_code == 422
    assert client.get("/api/admin/statistics?from=2024-03-05&to=2024-03-01").status_code == 400
    assert client.get("/api/admin/statistics?from=yesterday").status_code == 400
    assert upstream.requests == []

def test_quick_range_endpoint(client: TestClient):
    r = client.get("/api/admin/statistics/range?range=30d")
    assert r.status_code == 200
    data = r.json()
    assert data["from"].endswith("17:00:00.000Z")
    assert data["to"].endswith("16:59:59.999Z")
    assert data["from"] < data["to"]


# ======================= Team view =======================

def test_my_team_statistics(client: TestClient, upstream: FakeUpstream):
    upstream.set(MY_TEAM_PATH, {"data": {"overview": {"totalOrders": 3, "totalRevenue": 90000},
                                         "timeline": [{"date": "2024-03-01", "revenue": 90000, "orders": 3}]}})
    upstream.set(MY_TEAM_SHIPMENTS_PATH, {"summary": {"total": 3, "delivered": 2, "pending": 1}})

    r = client.get(f"/api/team/statistics?{RANGE_QS}", headers={"Authorization": "Bearer leader"})
    assert r.status_code == 200
    data = r.json()
    assert data["overview"]["totalOrders"] == 3
    assert data["timeline"] == [{"date": "2024-03-01", "revenue": 90000, "orders": 3}]
    assert data["shipments"]["delivered"] == 2 and data["shipments"]["pending"] == 1
    assert data["isError"] is False
    assert upstream.calls(MY_TEAM_PATH)[0].headers["authorization"] == "Bearer leader"

def test_my_team_statistics_shipments_down(client: TestClient, upstream: FakeUpstream):
    upstream.set(MY_TEAM_PATH, {"totalOrders": 1})
    r = client.get(f"/api/team/statistics?{RANGE_QS}")
    data = r.json()
    assert data["overview"]["totalOrders"] == 1
    assert data["isError"] is True
    assert data["error"]["status"] == 404
