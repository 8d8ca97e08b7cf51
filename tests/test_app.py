"""App-wide behaviour: health, request IDs, metrics and error rendering."""

import sqlite3
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from afyaconnect.api.main import app
from afyaconnect.api.metrics import normalize_path
from afyaconnect.api.middleware.rate_limiter import client_ip


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_liveness(self, client):
        assert client.get("/health/live").status_code == 200

    def test_readiness_checks_database(self, client):
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"]["database"] == "ok"

    def test_readiness_reports_unhealthy_database(self, client):
        with patch(
            "afyaconnect.api.routers.system.db_cursor",
            side_effect=sqlite3.OperationalError("unable to open database file"),
        ):
            resp = client.get("/health/ready")
        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"


class TestRequestLogging:
    def test_request_id_is_generated(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Request-ID"]

    def test_request_id_is_propagated(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert resp.headers["X-Request-ID"] == "req-123"

    def test_security_headers(self, client):
        resp = client.get("/api/hospitals")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"


class TestMetrics:
    def test_metrics_endpoint(self, client):
        client.get("/api/hospitals/search", params={"query": "cardio"})
        resp = client.get("/api/metrics")
        assert resp.status_code == 200
        assert "hospital_search_requests_total" in resp.text
        assert "http_requests_total" in resp.text

    def test_paths_are_normalized(self):
        assert normalize_path("/api/hospitals/12") == "/api/hospitals/{id}"
        assert normalize_path("/api/hospitals/12/ratings") == "/api/hospitals/{id}/ratings"
        assert normalize_path("/uploads/a.png") == "/uploads/*"
        assert normalize_path("/api/hospitals/name/Central") == "/api/hospitals/name/{name}"


class TestErrorRendering:
    def test_unknown_route_uses_error_field(self, client):
        resp = client.get("/api/does-not-exist")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found"}

    def test_storage_failure_is_sanitized(self):
        client = TestClient(app, raise_server_exceptions=False)
        with patch(
            "afyaconnect.api.routers.hospitals.hospital_service.list_all",
            side_effect=sqlite3.OperationalError("no such table: hospitals"),
        ):
            resp = client.get("/api/hospitals")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error"}

    def test_storage_failure_detail_in_debug(self):
        client = TestClient(app, raise_server_exceptions=False)
        with patch("afyaconnect.core.config.settings.DEBUG", True), patch(
            "afyaconnect.api.routers.hospitals.hospital_service.list_all",
            side_effect=sqlite3.OperationalError("no such table: hospitals"),
        ):
            resp = client.get("/api/hospitals")
        assert resp.status_code == 500
        assert "no such table" in resp.json()["error"]

    def test_malformed_json_is_a_client_error(self, client):
        resp = client.post(
            "/api/inquiries",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "error" in resp.json()


class TestClientAddress:
    @staticmethod
    def _request(headers):
        request = MagicMock()
        request.headers = headers
        request.client.host = "10.0.0.9"
        return request

    def test_first_forwarded_hop_wins(self):
        request = self._request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
        assert client_ip(request) == "203.0.113.7"

    def test_real_ip_header(self):
        assert client_ip(self._request({"X-Real-IP": "198.51.100.4"})) == "198.51.100.4"

    def test_falls_back_to_peer(self):
        assert client_ip(self._request({})) == "10.0.0.9"
