"""Shared fixtures: a Flask app on a throwaway SQLite file per test."""

import os
import tempfile

# Keep the import-time configuration away from the project data and log folders
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIRECTORY", tempfile.mkdtemp(prefix="foodregistry-logs-"))
os.environ.setdefault("RESOURCE_MONITOR_INTERVAL", "0")

import pytest

from foodregistry.app import create_app
from foodregistry.config import Config
from foodregistry.database import dispose_sqlalchemy_engine, get_db_session
from foodregistry.domain import Producer, Product


@pytest.fixture
def app_config(tmp_path):
    return Config(
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'catalog.db'}",
        APP_DEBUG=True,
        LOG_LEVEL="WARNING",
        RESOURCE_MONITOR_INTERVAL=0,
        SEED_SAMPLE_DATA=False,
    )


@pytest.fixture
def app(app_config):
    application = create_app(app_config)
    application.config["TESTING"] = True
    yield application
    dispose_sqlalchemy_engine()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def product_repository(app):
    return app.config["product_repository"]


@pytest.fixture
def producer_repository(app):
    return app.config["producer_repository"]


@pytest.fixture
def make_producer(producer_repository):
    """Stores a producer and returns its id."""
    def _make(name="Nordic Dairy AS", address=None):
        producer = Producer(name=name, address=address)
        with get_db_session() as db:
            assert producer_repository.create_producer(db, producer)
        return producer.producer_id
    return _make


@pytest.fixture
def make_product(product_repository):
    """Stores a product and returns its id."""
    def _make(producer_id, name="Whole Milk", description="Fresh whole milk", category=None):
        product = Product(name=name, description=description, category=category, producer_id=producer_id)
        with get_db_session() as db:
            assert product_repository.create(db, product)
        return product.product_id
    return _make
