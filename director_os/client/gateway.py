"""
Director OS remote gateway.

All client-side HTTP calls to the Director OS REST API go through this class.
One request per call, no retry: a failed call is reported back so the
data-access facade can serve it from the local store instead.

Testability: pass a fake ``session`` to RemoteGateway() in tests instead of
letting it create a real requests.Session internally.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from director_os.config import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class GatewayResult:
    """Structured return value from RemoteGateway calls.

    Attributes:
        ok:             True if the call succeeded (HTTP 2xx + no exception).
        status_code:    HTTP status code (None if network-level failure).
        data:           Parsed JSON response body (dict or list), else None.
        error:          Human-readable error message or None.
        duration_ms:    Round-trip latency in milliseconds.
    """

    def __init__(
        self,
        ok: bool,
        status_code: int | None,
        data: dict | list | None,
        error: str | None,
        duration_ms: int,
    ) -> None:
        self.ok = ok
        self.status_code = status_code
        self.data = data
        self.error = error
        self.duration_ms = duration_ms

    def __repr__(self) -> str:
        return f"<GatewayResult ok={self.ok} status={self.status_code} {self.duration_ms}ms>"


class RemoteGateway:
    """Typed wrapper over the REST API under a single base URL.

    Usage:
        gateway = RemoteGateway("http://localhost:3001/api")
        result = gateway.get_dashboard()
        if result.ok:
            bundle = result.data
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: requests.Session | None = session
        self.token: str | None = None
        self.user: dict | None = None

    # ── HTTP session ─────────────────────────────────────────────────────────

    @property
    def session(self) -> requests.Session:
        """Return (or lazily create) the requests.Session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def set_credentials(self, token: str | None, user: dict | None = None) -> None:
        """Attach (or clear, with None) the bearer token and user hints."""
        self.token = token
        self.user = user

    # ── Core request dispatcher ──────────────────────────────────────────────

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: dict | list | None = None,
        extra_headers: dict | None = None,
    ) -> GatewayResult:
        """Execute one request against ``{base_url}{endpoint}``.

        Returns:
            GatewayResult — always returns (never raises). Callers check .ok.
        """
        url = f"{self.base_url}{endpoint}"
        headers = {"Accept": "application/json"}
        if json_body is not None:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if extra_headers:
            headers.update(extra_headers)

        kwargs: dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if json_body is not None:
            kwargs["json"] = json_body

        t0 = time.perf_counter()
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.Timeout:
            logger.warning("API request timed out method=%s url=%s", method, url)
            return GatewayResult(
                ok=False, status_code=None, data=None,
                error=f"Request timed out after {self.timeout}s",
                duration_ms=int(self.timeout * 1000),
            )
        except requests.RequestException as exc:
            logger.warning("API network error method=%s url=%s error=%s", method, url, exc)
            return GatewayResult(
                ok=False, status_code=None, data=None,
                error=str(exc)[:500],
                duration_ms=int((time.perf_counter() - t0) * 1000),
            )
        duration_ms = int((time.perf_counter() - t0) * 1000)

        if not resp.ok:
            logger.warning("API request failed method=%s status=%d url=%s", method, resp.status_code, url)
            return GatewayResult(
                ok=False, status_code=resp.status_code, data=None,
                error=f"HTTP {resp.status_code}: {resp.text[:500]}",
                duration_ms=duration_ms,
            )

        try:
            data = resp.json() if resp.content else {}
        except ValueError:
            return GatewayResult(
                ok=False, status_code=resp.status_code, data=None,
                error="Response body is not valid JSON",
                duration_ms=duration_ms,
            )
        return GatewayResult(
            ok=True, status_code=resp.status_code, data=data, error=None,
            duration_ms=duration_ms,
        )

    # ── Auth ─────────────────────────────────────────────────────────────────

    def login(self, username: str) -> GatewayResult:
        return self.request("POST", "/login", json_body={"username": username})

    # ── Dashboard ────────────────────────────────────────────────────────────

    def get_dashboard(self) -> GatewayResult:
        """Bundled read; the server scopes it by the role/name hints."""
        hints = {}
        if self.user:
            hints["x-user-role"] = self.user.get("role", "")
            hints["x-user-name"] = self.user.get("username", "")
        return self.request("GET", "/dashboard", extra_headers=hints)

    def upload_metrics(self, metrics: list[dict]) -> GatewayResult:
        return self.request("POST", "/upload", json_body={"metrics": metrics})

    # ── Users ────────────────────────────────────────────────────────────────

    def get_users(self) -> GatewayResult:
        return self.request("GET", "/users")

    def add_user(self, user: dict) -> GatewayResult:
        return self.request("POST", "/users", json_body=user)

    def delete_user(self, user_id: str) -> GatewayResult:
        return self.request("DELETE", f"/users/{user_id}")

    # ── Projects ─────────────────────────────────────────────────────────────

    def add_project(self, project: dict) -> GatewayResult:
        return self.request("POST", "/projects", json_body=project)

    def update_project(self, project: dict) -> GatewayResult:
        return self.request("PUT", f"/projects/{project['id']}", json_body=project)

    def delete_project(self, project_id: str) -> GatewayResult:
        return self.request("DELETE", f"/projects/{project_id}")

    # ── PM profiles ──────────────────────────────────────────────────────────

    def add_pm(self, pm: dict) -> GatewayResult:
        return self.request("POST", "/pms", json_body=pm)

    def update_pm(self, pm: dict) -> GatewayResult:
        return self.request("PUT", f"/pms/{pm['id']}", json_body=pm)

    def delete_pm(self, pm_id: str) -> GatewayResult:
        return self.request("DELETE", f"/pms/{pm_id}")

    # ── Transformation tasks ─────────────────────────────────────────────────

    def add_task(self, task: dict) -> GatewayResult:
        return self.request("POST", "/tasks", json_body=task)

    def update_task(self, task: dict) -> GatewayResult:
        return self.request("PUT", f"/tasks/{task['id']}", json_body=task)

    def delete_task(self, task_id: str) -> GatewayResult:
        return self.request("DELETE", f"/tasks/{task_id}")

    # ── Config ───────────────────────────────────────────────────────────────

    def update_config(self, config: dict) -> GatewayResult:
        return self.request("PUT", "/config", json_body=config)
