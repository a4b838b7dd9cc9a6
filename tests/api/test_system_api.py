"""
API Integration Tests for System Endpoints
"""


class TestSystemAPI:
    """Integration tests for system and root endpoints"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["endpoints"]["transform"] == "/api/transform"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["services"]["image_service"] is True

    def test_system_health(self, client):
        response = client.get("/api/system/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_status(self, client):
        response = client.get("/api/system/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        assert data["memory_usage"]["process_mb"] > 0

    def test_config(self, client):
        response = client.get("/api/system/config")

        assert response.status_code == 200
        data = response.json()
        assert data["image"]["default_quality"] == 85
        assert data["image"]["trim_threshold"] == 10
        assert data["image"]["high_quality"] is False
        assert data["image"]["output_format"] == "PNG"
        assert data["system"]["log_level"] == "INFO"
