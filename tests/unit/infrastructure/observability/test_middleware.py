"""Unit tests for RequestLoggingMiddleware."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from hamusic.infrastructure.observability.middleware import RequestLoggingMiddleware

MIDDLEWARE = "hamusic.infrastructure.observability.middleware"


class TestRequestLoggingMiddleware:
    """Test suite for RequestLoggingMiddleware."""

    @pytest.fixture
    def app(self) -> FastAPI:
        """Create a FastAPI app with middleware for testing."""
        app = FastAPI()
        app.add_middleware(RequestLoggingMiddleware)

        @app.get("/test")
        async def test_endpoint():
            return {"message": "test"}

        @app.get("/missing")
        async def missing_endpoint():
            raise HTTPException(status_code=404, detail="nope")

        @app.get("/error")
        async def error_endpoint():
            raise ValueError("Test error")

        return app

    @pytest.fixture
    def client(self, app: FastAPI) -> TestClient:
        """Create a test client."""
        return TestClient(app)

    def test_successful_request_logs_completion(self, client: TestClient) -> None:
        """One completion line per request: "✓ GET /test → 200 (Xms)"."""
        with patch(f"{MIDDLEWARE}.logger") as mock_logger:
            response = client.get("/test")

            assert response.status_code == 200
            assert mock_logger.info.call_count == 1
            log_message = mock_logger.info.call_args_list[0][0][0]
            assert log_message.startswith("✓ GET /test → 200")
            assert log_message.endswith("ms)")

    def test_client_error_is_marked(self, client: TestClient) -> None:
        with patch(f"{MIDDLEWARE}.logger") as mock_logger:
            response = client.get("/missing")

            assert response.status_code == 404
            log_message = mock_logger.info.call_args_list[0][0][0]
            assert log_message.startswith("✗ GET /missing → 404")

    def test_correlation_id_header_is_echoed(self, client: TestClient) -> None:
        response = client.get("/test", headers={"X-Correlation-ID": "custom-id"})
        assert response.headers["X-Correlation-ID"] == "custom-id"

    def test_correlation_id_generated_without_header(self, client: TestClient) -> None:
        with patch(f"{MIDDLEWARE}.set_correlation_id") as mock_set_correlation_id:
            client.get("/test")
            mock_set_correlation_id.assert_called_once_with(None)

        response = client.get("/test")
        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_error_request_logs_exception(self, client: TestClient) -> None:
        with patch(f"{MIDDLEWARE}.logger") as mock_logger:
            with pytest.raises(ValueError):
                client.get("/error")

            assert mock_logger.exception.call_count == 1
            log_message = mock_logger.exception.call_args[0][0]
            assert log_message == "Request failed: GET /error"
            assert mock_logger.exception.call_args[1]["extra"]["error_type"] == "ValueError"
