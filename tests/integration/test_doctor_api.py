"""End-to-end HTTP tests against the FastAPI app."""

import pytest
from fastapi.testclient import TestClient

from common.rate_limit import RateLimiter
from main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restore_state(client):
    """Put back any app.state objects a test swaps out."""
    saved = {
        "config": client.app.state.config,
        "rate_limiter": client.app.state.rate_limiter,
    }
    yield client.app.state
    for name, value in saved.items():
        setattr(client.app.state, name, value)


class TestDoctorProfile:
    def test_profile_uses_camel_case(self, client):
        response = client.get("/doctors/doctor-test-1")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "doctor-test-1"
        assert body["userId"] == "user-test-1"
        assert body["isVerified"] is True
        assert set(body) == {
            "id",
            "userId",
            "firstName",
            "lastName",
            "specialty",
            "hpcsaNumber",
            "phone",
            "province",
            "city",
            "zipCode",
            "practiceAddress",
            "isVerified",
            "rating",
            "reviewCount",
            "consultationFee",
        }

    def test_profile_matches_generator(self, client):
        from app.generator import synthesize_doctor

        response = client.get("/doctors/doctor-abc-9")
        assert response.json() == synthesize_doctor("doctor-abc-9").to_dict()

    def test_repeated_requests_agree(self, client):
        first = client.get("/doctors/doctor-repeat").json()
        second = client.get("/doctors/doctor-repeat").json()
        assert first == second

    def test_invalid_id_is_404(self, client):
        response = client.get("/doctors/Doctor-XYZ")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "DOCTOR_NOT_FOUND"
        assert "Doctor-XYZ" in body["message"]
        assert "timestamp" in body

    def test_request_id_and_timing_headers(self, client):
        response = client.get(
            "/doctors/doctor-test-1", headers={"X-Request-ID": "req-123"}
        )
        assert response.headers["X-Request-ID"] == "req-123"
        assert "generator;dur=" in response.headers["Server-Timing"]

    def test_rate_limit_headers_on_success(self, client):
        response = client.get("/doctors/doctor-test-1")
        assert response.headers["X-RateLimit-Limit"] == "100000"
        assert "X-RateLimit-Remaining" in response.headers


class TestSlots:
    def test_slots(self, client):
        response = client.get(
            "/doctors/doctor-test-1/slots", params={"date": "2024-06-01"}
        )

        assert response.status_code == 200
        slots = response.json()
        assert len(slots) == 15
        assert slots[0] == {
            "time": "09:00",
            "available": slots[0]["available"],
            "datetime": "2024-06-01T09:00:00.000Z",
        }
        assert slots[-1]["time"] == "16:00"

    def test_invalid_date_is_400(self, client):
        response = client.get(
            "/doctors/doctor-test-1/slots", params={"date": "2024-02-30"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_DATE"

    def test_missing_date_is_422(self, client):
        assert client.get("/doctors/doctor-test-1/slots").status_code == 422

    def test_invalid_id_is_404(self, client):
        response = client.get("/doctors/nobody/slots", params={"date": "2024-06-01"})
        assert response.status_code == 404


class TestRoster:
    def test_default_roster(self, client):
        response = client.get("/doctors")

        assert response.status_code == 200
        roster = response.json()
        assert len(roster) == 20
        assert all(d["id"].startswith("doctor-generated-list-") for d in roster)
        ratings = [float(d["rating"]) for d in roster]
        assert ratings == sorted(ratings, reverse=True)

    def test_count_and_prefix(self, client):
        roster = client.get("/doctors", params={"count": 3, "prefix": "home"}).json()
        assert sorted(d["id"] for d in roster) == [
            "doctor-generated-home-1",
            "doctor-generated-home-2",
            "doctor-generated-home-3",
        ]

    def test_count_is_clamped_to_max_list_size(self, client):
        roster = client.get("/doctors", params={"count": 150}).json()
        assert len(roster) == 100

    def test_filters_and_sort(self, client):
        everyone = client.get("/doctors", params={"count": 60}).json()
        province = everyone[0]["province"]

        roster = client.get(
            "/doctors",
            params={
                "count": 60,
                "province": province,
                "sortBy": "price",
                "sortOrder": "asc",
            },
        ).json()

        assert roster
        assert all(d["province"] == province for d in roster)
        fees = [float(d["consultationFee"]) for d in roster]
        assert fees == sorted(fees)

    def test_search_query(self, client):
        roster = client.get("/doctors", params={"count": 60, "q": "cardio"}).json()
        assert all(
            "cardio" in f"{d['firstName']} {d['lastName']} {d['specialty']} {d['city']}".lower()
            for d in roster
        )

    @pytest.mark.parametrize(
        "params",
        [
            {"count": 0},
            {"count": "many"},
            {"prefix": "Bad Prefix"},
            {"sortBy": "height"},
            {"sortOrder": "sideways"},
        ],
    )
    def test_invalid_query_is_422(self, client, params):
        assert client.get("/doctors", params=params).status_code == 422


class TestReference:
    def test_provinces(self, client):
        provinces = client.get("/reference/provinces").json()
        assert len(provinces) == 9
        assert provinces[0]["name"] == "Gauteng"
        assert provinces[0]["postalCodeRange"] == {"min": 1000, "max": 2999}

    def test_specialties(self, client):
        specialties = client.get("/reference/specialties").json()
        assert "Cardiology" in specialties
        assert len(specialties) == 23


class TestRateLimiting:
    def test_exceeding_budget_returns_429(self, client, restore_state):
        restore_state.rate_limiter = RateLimiter(max_requests=2, window_seconds=60)

        assert client.get("/doctors/doctor-a").status_code == 200
        assert client.get("/reference/specialties").status_code == 200
        response = client.get("/doctors/doctor-a")

        assert response.status_code == 429
        assert response.json()["error"] == "RATE_LIMIT_EXCEEDED"
        assert response.headers["Retry-After"] == "60"
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_forwarded_header_from_untrusted_peer_is_ignored(
        self, client, restore_state
    ):
        restore_state.rate_limiter = RateLimiter(max_requests=2, window_seconds=900)

        codes = [
            client.get(
                "/doctors/doctor-a", headers={"X-Forwarded-For": f"198.51.100.{i}"}
            ).status_code
            for i in range(20)
        ]

        assert codes[:2] == [200, 200]
        assert set(codes[2:]) == {429}
        assert restore_state.rate_limiter.tracked_keys == 1

    def test_forwarded_header_from_trusted_proxy_is_honored(
        self, client, restore_state
    ):
        config = restore_state.config
        restore_state.config = config.model_copy(
            update={
                "api": config.api.model_copy(
                    update={"trusted_proxies": ["testclient", "10.0.0.1"]}
                )
            }
        )
        restore_state.rate_limiter = RateLimiter(max_requests=1, window_seconds=900)

        first = client.get(
            "/doctors/doctor-a", headers={"X-Forwarded-For": "198.51.100.1, 10.0.0.1"}
        )
        second = client.get(
            "/doctors/doctor-a", headers={"X-Forwarded-For": "198.51.100.2"}
        )
        repeat = client.get(
            "/doctors/doctor-a", headers={"X-Forwarded-For": "198.51.100.1"}
        )

        assert (first.status_code, second.status_code) == (200, 200)
        assert repeat.status_code == 429

    def test_health_is_not_rate_limited(self, client, restore_state):
        restore_state.rate_limiter = RateLimiter(max_requests=1, window_seconds=60)
        client.get("/doctors/doctor-a")
        assert client.get("/health/live").status_code == 200


class TestMaintenanceMode:
    def test_api_rejected_and_not_ready(self, client, restore_state):
        config = restore_state.config
        restore_state.config = config.model_copy(
            update={"api": config.api.model_copy(update={"maintenance_mode": True})}
        )

        response = client.get("/doctors/doctor-test-1")
        assert response.status_code == 503
        assert response.json()["error"] == "MAINTENANCE_MODE"

        ready = client.get("/health/ready")
        assert ready.status_code == 503
        assert ready.json()["status"] == "not_ready"


class TestHealth:
    def test_health(self, client):
        client.app.state.request_stats.reset()
        client.get("/doctors/doctor-test-1")

        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["environment"] == "development"
        assert body["requests"]["total_requests"] == 1
        assert body["requests"]["error_rate"] == 0

    def test_degraded_when_errors_dominate(self, client):
        client.app.state.request_stats.reset()
        for _ in range(3):
            client.get("/doctors/NOT-VALID")

        body = client.get("/health").json()
        assert body["status"] == "degraded"
        assert body["requests"]["error_rate"] == 100

    def test_failure_uses_error_body(self, client):
        class BrokenStats:
            def summary(self):
                raise RuntimeError("stats unavailable")

        saved = client.app.state.request_stats
        client.app.state.request_stats = BrokenStats()
        try:
            response = client.get("/health")
        finally:
            client.app.state.request_stats = saved

        assert response.status_code == 500
        body = response.json()
        assert set(body) == {"error", "message", "timestamp"}
        assert body["error"] == "HEALTH_CHECK_FAILED"
        assert "stats unavailable" in body["message"]

    def test_documented_error_body_matches_handler(self, client):
        schema = client.get("/openapi.json").json()["components"]["schemas"]
        assert set(schema["ErrorResponse"]["properties"]) == {
            "error",
            "message",
            "timestamp",
        }

    def test_live_and_ready(self, client):
        assert client.get("/health/live").json()["status"] == "alive"
        assert client.get("/health/ready").json()["status"] == "ready"

    def test_metrics(self, client):
        body = client.get("/metrics").json()
        assert "logger" in body
        assert "total_requests" in body["requests"]


class TestCors:
    def test_dev_origin_allowed(self, client):
        response = client.get(
            "/reference/specialties", headers={"Origin": "http://localhost:3000"}
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unknown_origin_not_echoed(self, client):
        response = client.get(
            "/reference/specialties", headers={"Origin": "https://evil.example"}
        )
        assert "access-control-allow-origin" not in response.headers
