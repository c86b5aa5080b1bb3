"""Blueprint registrations for application routes."""

from flask import Flask

from .config import blueprint as config_blueprint
from .invoices import blueprint as invoices_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(invoices_blueprint)
    app.register_blueprint(config_blueprint)
