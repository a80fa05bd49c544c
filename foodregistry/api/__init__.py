# foodregistry/api/__init__.py
# Initializes the API layer and registers blueprints.

from flask import Flask
from .routes.products import products_bp
from .routes.producers import producers_bp

from foodregistry.utils.logger import logger

BLUEPRINTS = [
    (products_bp, '/api/products'),
    (producers_bp, '/api/producers'),
]

def register_blueprints(app: Flask):
    """Registers all defined blueprints with the Flask application."""
    for bp, prefix in BLUEPRINTS:
        app.register_blueprint(bp, url_prefix=prefix)
        logger.debug(f"Blueprint '{bp.name}' registered with prefix '{prefix}'.")
    logger.info("All API blueprints registered.")

__all__ = ["register_blueprints"]
