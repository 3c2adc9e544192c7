"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST and WebSocket endpoints and for startup behaviour.

==============================================================================
"""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core.exceptions import FieldError, ResourceUnavailable
from app.main import create_app


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check reports the loaded catalog."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["catalog"] == "healthy"
        assert data["details"]["products_loaded"] == 3

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True

    def test_root(self, client: TestClient):
        """Test the service banner shows the catalog state."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["catalog"] == "ready"


class TestProductEndpoints:
    """Tests for product endpoints."""

    def test_list_products(self, client: TestClient):
        """Test listing products in catalog order."""
        response = client.get("/api/v1/products")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [p["id"] for p in data["products"]] == ["A1", "B7", "4601234567890"]

    def test_list_products_limit(self, client: TestClient):
        """Test the list limit."""
        data = client.get("/api/v1/products", params={"limit": 1}).json()
        assert data["total"] == 3
        assert len(data["products"]) == 1

    def test_get_product(self, client: TestClient):
        """Test fetching a product by id."""
        response = client.get("/api/v1/products/A1")
        assert response.status_code == 200
        assert response.json()["product"] == {
            "id": "A1", "name": "Widget", "price": 9.99, "weight": 0.5
        }

    def test_get_product_not_found(self, client: TestClient):
        """Test unknown ids return 404 with the error envelope."""
        response = client.get("/api/v1/products/B2")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "PRODUCT_NOT_FOUND"
        assert data["error"]["details"] == {"id": "B2"}

    def test_get_product_case_sensitive(self, client: TestClient):
        """Test lookups through the API are case-sensitive."""
        assert client.get("/api/v1/products/a1").status_code == 404

    def test_stats(self, client: TestClient):
        """Test catalog statistics."""
        data = client.get("/api/v1/products/stats").json()
        assert data["stats"] == {"total_products": 3, "unique_ids": 3}


class TestScanEndpoints:
    """Tests for the scan endpoint."""

    def test_scan_found(self, client: TestClient):
        """Test a scanned code that is in the catalog."""
        response = client.post("/api/v1/scans", json={"payload": "B7"})
        assert response.status_code == 200
        data = response.json()
        assert data["found"] is True
        assert data["product"]["name"] == "Gadget"
        assert data["message"] is None

    def test_scan_not_found(self, client: TestClient):
        """Test a miss is a normal result with the overlay message."""
        response = client.post("/api/v1/scans", json={"payload": "unknown-code"})
        assert response.status_code == 200
        data = response.json()
        assert data["found"] is False
        assert data["product"] is None
        assert data["message"] == "Information not found"

    def test_scan_requires_payload(self, client: TestClient):
        """Test the payload field is required."""
        response = client.post("/api/v1/scans", json={})
        assert response.status_code == 422


class TestScannerWebSocket:
    """Tests for the /ws/scan stream."""

    def test_results_in_order(self, client: TestClient):
        """Test each scan gets one result, in order."""
        with client.websocket_connect("/ws/scan") as ws:
            ready = ws.receive_json()
            assert ready == {"type": "ready", "products": 3}

            for payload in ("A1", "missing", "4601234567890"):
                ws.send_json({"type": "scan", "payload": payload})

            results = [ws.receive_json() for _ in range(3)]
            ws.send_json({"type": "stop"})

        assert [r["type"] for r in results] == ["result"] * 3
        assert [r["scanned_code"] for r in results] == ["A1", "missing", "4601234567890"]
        assert [r["found"] for r in results] == [True, False, True]
        assert results[1]["message"] == "Information not found"

    def test_invalid_messages(self, client: TestClient):
        """Test malformed messages get error replies."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.receive_json()

            ws.send_json({"type": "scan", "payload": 123})
            assert ws.receive_json()["code"] == "INVALID_PAYLOAD"

            ws.send_json({"type": "frame"})
            assert ws.receive_json()["code"] == "UNKNOWN_TYPE"

            ws.send_json({"type": "stop"})

    def test_non_json_frame_keeps_session_open(self, client: TestClient):
        """Test a frame that is not JSON gets an error and the session continues."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.receive_json()

            ws.send_text("not json")
            reply = ws.receive_json()
            assert reply["type"] == "error"
            assert reply["code"] == "INVALID_MESSAGE"

            ws.send_text("null")
            assert ws.receive_json()["code"] == "INVALID_MESSAGE"

            ws.send_json({"type": "scan", "payload": "A1"})
            result = ws.receive_json()
            assert result["type"] == "result"
            assert result["found"] is True

            ws.send_json({"type": "stop"})


class TestStartup:
    """Tests for startup refusal on a broken catalog."""

    def test_missing_catalog_aborts_startup(self, tmp_path):
        """Test a missing catalog file prevents the app from starting."""
        app = create_app(Settings(products_file=str(tmp_path / "absent.yaml")))
        with pytest.raises(ResourceUnavailable):
            with TestClient(app):
                pass
        assert app.state.catalog_service.state.value == "failed"

    def test_malformed_entry_aborts_startup(self, write_catalog):
        """Test a malformed entry prevents the app from starting."""
        path = write_catalog('products: [{id: A1, name: W, price: "abc", weight: 1}]')
        app = create_app(Settings(products_file=str(path)))
        with pytest.raises(FieldError):
            with TestClient(app):
                pass

    def test_lenient_startup(self, write_catalog):
        """Test skip_invalid_products lets startup continue without the entry."""
        path = write_catalog(
            """
            products:
              - {id: A1, name: W, price: abc, weight: 1}
              - {id: A2, name: G, price: 2, weight: 1}
            """
        )
        app = create_app(Settings(products_file=str(path), skip_invalid_products=True))
        with TestClient(app) as client:
            assert client.get("/api/v1/products/A1").status_code == 404
            assert client.get("/api/v1/products/A2").status_code == 200

    def test_lookup_before_startup(self, settings):
        """Test requests without the lifespan report the catalog as not loaded."""
        client = TestClient(create_app(settings))
        response = client.get("/api/v1/products/A1")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "CATALOG_NOT_LOADED"
