"""
Director OS
SQLAlchemy database instance and model registry.

Every model module imports ``db`` from here; ``create_app`` imports the model
modules so ``db.create_all()`` sees every table.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
