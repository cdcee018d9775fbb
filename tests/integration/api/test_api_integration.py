"""
Integration tests for the FastAPI application.

These tests use TestClient against create_app(settings); provider calls are
answered by httpx.MockTransport handlers.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from menu_gateway.main import create_app

pytestmark = pytest.mark.integration

VALID_PROMPT = "Create a weekly menu for a family of four, one vegetarian."


def gemini_reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


class TestGenerateMenuValidation:
    def test_nine_char_prompt_is_400(self, client):
        response = client.post("/api/generate-menu", json={"prompt": "a" * 9})

        assert response.status_code == 400
        assert response.json()["error"] == "Prompt too short. Provide more details."

    def test_oversized_prompt_is_400(self, client):
        response = client.post("/api/generate-menu", json={"prompt": "a" * 50001})

        assert response.status_code == 400
        assert response.json()["error"] == "Prompt too large"

    def test_missing_prompt_is_400(self, client):
        response = client.post("/api/generate-menu", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Prompt not provided"

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/generate-menu",
            content=b'{"prompt": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body is not valid JSON"

    def test_body_over_limit_is_400(self, test_settings):
        settings = test_settings.model_copy(update={"MAX_BODY_BYTES": 100})
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/generate-menu", json={"prompt": "a" * 200})

        assert response.status_code == 400
        assert response.json()["error"] == "Request body too large"

    def test_details_included_outside_production(self, client):
        response = client.post("/api/generate-menu", json={"prompt": "short"})

        assert response.json()["details"] == {"length": 5, "min_length": 10}

    def test_details_hidden_in_production(self, test_settings):
        settings = test_settings.model_copy(update={"ENVIRONMENT": "production"})
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/generate-menu", json={"prompt": "short"})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt too short. Provide more details."}


class TestGenerateMenuProviders:
    def test_no_provider_configured_is_500(self, client):
        response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 500
        error = response.json()["error"]
        for env_var in ("GROQ_API_KEY", "GOOGLE_API_KEY", "ANTHROPIC_API_KEY"):
            assert env_var in error

    def test_success_returns_provider_json_verbatim(self, google_settings, provider_transport):
        app = create_app(google_settings)
        requests = provider_transport(
            app,
            google_settings,
            lambda request: gemini_reply('```json\n{"days": [{"day": "Monday"}]}\n```'),
        )

        with TestClient(app) as client:
            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 200
        assert response.json() == {"days": [{"day": "Monday"}]}
        assert len(requests) == 1
        assert requests[0].headers["x-goog-api-key"] == "test-google-key"

    def test_model_fallback_on_404(self, google_settings, provider_transport):
        def handler(request: httpx.Request) -> httpx.Response:
            if "gemini-2.0-flash" in request.url.path:
                return httpx.Response(404, json={"error": {"message": "model not found"}})
            return gemini_reply('{"ok": true}')

        app = create_app(google_settings)
        requests = provider_transport(app, google_settings, handler)

        with TestClient(app) as client:
            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert [request.url.path.split("/")[-1] for request in requests] == [
            "gemini-2.0-flash:generateContent",
            "gemini-1.5-flash-latest:generateContent",
        ]

    def test_provider_auth_failure_is_502(self, google_settings, provider_transport):
        app = create_app(google_settings)
        requests = provider_transport(
            app,
            google_settings,
            lambda request: httpx.Response(401, json={"error": {"message": "API key not valid"}}),
        )

        with TestClient(app) as client:
            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 502
        assert "test-google-key" not in response.text
        assert len(requests) == 1

    def test_invalid_json_from_provider_is_502(self, google_settings, provider_transport):
        app = create_app(google_settings)
        provider_transport(app, google_settings, lambda request: gemini_reply("not json"))

        with TestClient(app) as client:
            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 502
        assert "valid JSON" in response.json()["error"]

    def test_provider_timeout_is_504(self, google_settings, provider_transport):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        app = create_app(google_settings)
        provider_transport(app, google_settings, handler)

        with TestClient(app) as client:
            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 504


class TestRateLimiting:
    def test_headers_on_every_response(self, client):
        ok_shape = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})
        invalid = client.post("/api/generate-menu", json={"prompt": "short"})

        for response in (ok_shape, invalid):
            assert response.headers["X-RateLimit-Limit"] == "20"
        assert ok_shape.headers["X-RateLimit-Remaining"] == "19"
        assert invalid.headers["X-RateLimit-Remaining"] == "18"

    def test_429_after_max_requests(self, test_settings):
        settings = test_settings.model_copy(update={"RATE_LIMIT_MAX_REQUESTS": 2})
        with TestClient(create_app(settings)) as client:
            for _ in range(2):
                assert client.post("/api/generate-menu", json={"prompt": "short"}).status_code == 400

            response = client.post("/api/generate-menu", json={"prompt": VALID_PROMPT})

        assert response.status_code == 429
        body = response.json()
        assert body["error"] == "Too many requests. Please wait before generating a new menu."
        assert 0 < body["retryAfter"] <= 3600
        assert response.headers["Retry-After"] == str(body["retryAfter"])
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_forwarded_for_gets_its_own_bucket(self, test_settings):
        settings = test_settings.model_copy(update={"RATE_LIMIT_MAX_REQUESTS": 1})
        with TestClient(create_app(settings)) as client:
            client.post("/api/generate-menu", json={"prompt": "short"})
            blocked = client.post("/api/generate-menu", json={"prompt": "short"})
            other = client.post(
                "/api/generate-menu",
                json={"prompt": "short"},
                headers={"X-Forwarded-For": "unknown, 203.0.113.5"},
            )

        assert blocked.status_code == 429
        assert other.status_code == 400

    def test_metrics_endpoint(self, client):
        client.post("/api/generate-menu", json={"prompt": "short"})

        response = client.get("/api/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["totalRequests"] == 1
        assert data["blockedRequests"] == 0
        assert data["uniqueKeys"] == 1
        assert data["blockRate"] == "0.00%"
        assert set(data) == {
            "totalRequests",
            "blockedRequests",
            "uniqueKeys",
            "currentlyBlocked",
            "activeRecords",
            "lastCleanupAt",
            "cleanupCount",
            "blockRate",
        }

    def test_metrics_before_any_request(self, client):
        assert client.get("/api/metrics").json()["blockRate"] == "0%"


class TestAuxiliaryEndpoints:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["provider"] == {"provider": None, "name": "None", "configured": False}

    def test_health_reports_active_provider(self, google_settings):
        with TestClient(create_app(google_settings)) as client:
            data = client.get("/api/health").json()

        assert data["provider"]["name"] == "Google Gemini"

    def test_unknown_route_is_404(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Route not found: GET /api/nope"

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_health_does_not_consume_quota(self, client):
        client.get("/api/health")

        assert client.get("/api/metrics").json()["totalRequests"] == 0


class TestCors:
    def test_allowed_origin(self, client):
        origin = "https://cardapio-familiar-inteligente.vercel.app"

        response = client.get("/api/health", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.parametrize("origin", ["http://localhost:8080", "http://127.0.0.1:4000"])
    def test_any_localhost_origin(self, client, origin):
        response = client.get("/api/health", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin

    def test_foreign_origin_not_allowed(self, client):
        response = client.get("/api/health", headers={"Origin": "https://evil.example"})

        assert "access-control-allow-origin" not in response.headers

    def test_preflight(self, client):
        response = client.options(
            "/api/generate-menu",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_no_origin_header_is_served(self, client):
        assert client.get("/api/health").status_code == 200
