"""
Director OS
Flask Application Factory.

Usage:
    from director_os import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

import click
from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

from director_os.config import config
from director_os.models import db
from director_os.middleware.logging_config import configure_logging
from director_os.middleware.rate_limiter import init_rate_limits
from director_os.middleware.timing import init_request_timing

logger = logging.getLogger(__name__)

migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # no global limit, applied per-blueprint
    storage_uri=os.getenv("RATELIMIT_STORAGE_URI", "memory://"),
)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    cfg = config[config_name]
    # ProductionConfig validates its environment on instantiation
    app.config.from_object(cfg() if config_name == "production" else cfg)
    os.makedirs(app.instance_path, exist_ok=True)

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Import all models so Alembic can detect them ─────────────────────
    from director_os.models import people as _people_models                # noqa: F401
    from director_os.models import portfolio as _portfolio_models          # noqa: F401
    from director_os.models import system_config as _system_config_models  # noqa: F401
    from director_os.models import transformation as _transformation_models  # noqa: F401

    # ── Auto-create tables + demo data ───────────────────────────────────
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_ON_STARTUP"):
            from director_os.services.seed import seed_database
            seed_database()

    # ── Blueprints ───────────────────────────────────────────────────────
    from director_os.blueprints.admin_bp import admin_bp
    from director_os.blueprints.auth_bp import auth_bp
    from director_os.blueprints.dashboard_bp import dashboard_bp
    from director_os.blueprints.health_bp import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(health_bp)

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed-demo")
    @click.option("--force", is_flag=True, help="Wipe existing rows before seeding.")
    def seed_demo_cmd(force):
        """Seed the demo portfolio (users, PMs, projects, metrics, tasks, config)."""
        from director_os.services.seed import seed_database
        counts = seed_database(force=force)
        if counts:
            click.echo(f"Seeded: {counts}")
        else:
            click.echo("Database already populated; use --force to reseed.")

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(404)
    def not_found(e):
        return {"error": "Not found", "path": request.path}, 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(429)
    def rate_limited(e):
        return {"error": "Too many requests", "retry_after": e.description}, 429

    @app.errorhandler(500)
    def server_error(e):
        logger.error("500 error: %s", e, exc_info=True)
        return {"error": "Internal server error"}, 500

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
