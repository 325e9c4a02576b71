"""
Director OS
Tests — login API, session tokens, health and app-level error handlers.
"""

import jwt

from director_os.services.token_service import ALGORITHM


class TestLogin:
    def test_login_known_user(self, client, app, seeded):
        res = client.post("/api/login", json={"username": "director"})
        assert res.status_code == 200
        data = res.get_json()
        assert data["user"]["id"] == "u1"
        assert data["user"]["role"] == "DIRECTOR"

        payload = jwt.decode(data["token"], app.config["SECRET_KEY"], algorithms=[ALGORITHM])
        assert payload["sub"] == "u1"
        assert payload["username"] == "director"
        assert payload["role"] == "DIRECTOR"

    def test_login_unknown_user(self, client, seeded):
        res = client.post("/api/login", json={"username": "nobody"})
        assert res.status_code == 401
        assert res.get_json()["code"] == "ERR_AUTH_UNKNOWN_USER"

    def test_login_missing_username(self, client):
        res = client.post("/api/login", json={})
        assert res.status_code == 400
        assert "error" in res.get_json()

    def test_login_strips_whitespace(self, client, seeded):
        res = client.post("/api/login", json={"username": "  pm "})
        assert res.status_code == 200
        assert res.get_json()["user"]["assignedProjectCodes"] == ["Project_Alpha", "Project_Sierra"]


class TestHealthAndErrors:
    def test_health(self, client):
        res = client.get("/api/health")
        assert res.status_code == 200
        data = res.get_json()
        assert data["status"] == "ok"
        assert data["checks"]["database"]["status"] == "ok"

    def test_timing_headers(self, client):
        res = client.get("/api/health")
        assert "X-Request-Duration-Ms" in res.headers
        assert res.headers["X-Request-ID"]

    def test_unknown_api_path_is_json_404(self, client):
        res = client.get("/api/does-not-exist")
        assert res.status_code == 404
        assert res.get_json()["error"] == "Not found"

    def test_wrong_method_is_json_405(self, client):
        res = client.delete("/api/dashboard")
        assert res.status_code == 405
        assert res.get_json()["error"] == "Method not allowed"


class TestSeedCommand:
    def test_seed_demo_is_idempotent(self, app):
        runner = app.test_cli_runner()
        first = runner.invoke(args=["seed-demo"])
        assert "Seeded" in first.output
        second = runner.invoke(args=["seed-demo"])
        assert "already populated" in second.output

    def test_seed_demo_force(self, app, seeded):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["seed-demo", "--force"])
        assert "Seeded" in result.output
