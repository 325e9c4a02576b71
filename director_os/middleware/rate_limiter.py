"""
Rate limiting configuration.

Applies per-blueprint limits using Flask-Limiter. The Limiter instance is
created in director_os/__init__.py with no default limits; this module
applies granular limits per route category.

Usage:
    from director_os.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)

WRITE_LIMIT = "60/minute"
READ_LIMIT = "200/minute"


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Login:            LOGIN_RATE_LIMIT (default 20/minute)
        - Admin / upload:   60/minute
        - Dashboard read:   200/minute
        - Health check:     exempt

    Rate limiting is disabled when RATELIMIT_ENABLED is false (testing).
    """
    if not app.config.get("RATELIMIT_ENABLED", True):
        app.logger.info("Rate limiter disabled (RATELIMIT_ENABLED=False)")
        return

    bp = app.blueprints.get("auth")
    if bp:
        limiter.limit(app.config.get("LOGIN_RATE_LIMIT", "20/minute"))(bp)

    bp = app.blueprints.get("admin")
    if bp:
        limiter.limit(WRITE_LIMIT)(bp)

    bp = app.blueprints.get("dashboard")
    if bp:
        limiter.limit(READ_LIMIT)(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info(
        "Rate limiter configured — login: %s, admin: %s, dashboard: %s",
        app.config.get("LOGIN_RATE_LIMIT"), WRITE_LIMIT, READ_LIMIT,
    )
