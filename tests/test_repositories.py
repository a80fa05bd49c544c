"""Tests for the product and producer repositories.

These tests verify:
- Lookups of missing rows return None instead of raising
- Database failures are reported as sentinels
- Deleting a producer removes its products in the same commit
- The producer foreign key is enforced
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from foodregistry.database import get_db_session
from foodregistry.domain import Producer, Product


def _broken_session():
    db = MagicMock(spec=Session)
    failure = OperationalError("SELECT 1", {}, Exception("database is unavailable"))
    db.get.side_effect = failure
    db.scalars.side_effect = failure
    db.execute.side_effect = failure
    db.commit.side_effect = failure
    return db


class TestProductRepository:
    """ProductRepository CRUD and failure contract."""

    def test_get_product_by_id_missing_returns_none(self, product_repository):
        with get_db_session() as db:
            assert product_repository.get_product_by_id(db, 9999) is None

    def test_get_product_by_id_database_failure_returns_none(self, product_repository):
        assert product_repository.get_product_by_id(_broken_session(), 1) is None

    def test_get_all_database_failure_returns_none(self, product_repository):
        assert product_repository.get_all(_broken_session()) is None

    def test_create_assigns_id(self, product_repository, make_producer):
        producer_id = make_producer()
        product = Product(name="Greek Yoghurt", description="Plain", producer_id=producer_id)

        with get_db_session() as db:
            assert product_repository.create(db, product) is True

        assert product.product_id is not None
        with get_db_session() as db:
            stored = product_repository.get_product_by_id(db, product.product_id)
            assert stored.name == "Greek Yoghurt"
            assert stored.producer_id == producer_id

    def test_create_with_unknown_producer_returns_false(self, product_repository):
        product = Product(name="Orphan", description="", producer_id=424242)

        with get_db_session() as db:
            assert product_repository.create(db, product) is False

        with get_db_session() as db:
            assert product_repository.get_all(db) == []

    def test_get_all_orders_by_id(self, product_repository, make_producer, make_product):
        producer_id = make_producer()
        first = make_product(producer_id, name="B")
        second = make_product(producer_id, name="A")

        with get_db_session() as db:
            products = product_repository.get_all(db)

        assert [p.product_id for p in products] == [first, second]

    def test_update_detached_product(self, product_repository, make_producer, make_product):
        producer_id = make_producer()
        product_id = make_product(producer_id)

        changed = Product(product_id=product_id, name="Skimmed Milk", description="0.1% fat", producer_id=producer_id)
        with get_db_session() as db:
            assert product_repository.update(db, changed) is True

        with get_db_session() as db:
            stored = product_repository.get_product_by_id(db, product_id)
            assert stored.name == "Skimmed Milk"
            assert stored.description == "0.1% fat"

    def test_update_missing_product_returns_false(self, product_repository, make_producer):
        producer_id = make_producer()
        ghost = Product(product_id=777, name="Ghost", description="", producer_id=producer_id)

        with get_db_session() as db:
            assert product_repository.update(db, ghost) is False

        with get_db_session() as db:
            assert product_repository.get_product_by_id(db, 777) is None

    def test_delete_removes_only_that_product(self, product_repository, make_producer, make_product):
        producer_id = make_producer()
        keep_id = make_product(producer_id, name="Keep")
        drop_id = make_product(producer_id, name="Drop")

        with get_db_session() as db:
            assert product_repository.delete(db, drop_id) is True

        with get_db_session() as db:
            remaining = [p.product_id for p in product_repository.get_all(db)]
        assert remaining == [keep_id]

    def test_delete_missing_product_returns_false(self, product_repository):
        with get_db_session() as db:
            assert product_repository.delete(db, 12345) is False

    def test_delete_database_failure_returns_false(self, product_repository):
        assert product_repository.delete(_broken_session(), 1) is False


class TestProducerRepository:
    """ProducerRepository CRUD and cascading delete."""

    def test_get_all_producers_database_failure_returns_empty_list(self, producer_repository):
        assert producer_repository.get_all_producers(_broken_session()) == []

    def test_get_producer_by_id_missing_returns_none(self, producer_repository):
        with get_db_session() as db:
            assert producer_repository.get_producer_by_id(db, 31337) is None

    def test_update_producer(self, producer_repository, make_producer):
        producer_id = make_producer(name="Old Name")

        with get_db_session() as db:
            assert producer_repository.update_producer(db, Producer(producer_id=producer_id, name="New Name")) is True
            assert producer_repository.get_producer_by_id(db, producer_id).name == "New Name"

    def test_update_missing_producer_returns_false(self, producer_repository):
        with get_db_session() as db:
            assert producer_repository.update_producer(db, Producer(producer_id=55, name="Nobody")) is False

    def test_delete_producer_removes_all_of_its_products(self, producer_repository, product_repository,
                                                         make_producer, make_product):
        doomed = make_producer(name="Doomed Farm")
        survivor = make_producer(name="Surviving Farm")
        for i in range(3):
            make_product(doomed, name=f"Doomed {i}")
        survivor_product = make_product(survivor, name="Survivor")

        with get_db_session() as db:
            assert producer_repository.delete_producer(db, doomed) is True

        with get_db_session() as db:
            assert producer_repository.get_producer_by_id(db, doomed) is None
            orphan_count = db.scalar(
                select(func.count()).select_from(Product).where(Product.producer_id == doomed)
            )
            assert orphan_count == 0
            remaining = [p.product_id for p in product_repository.get_all(db)]
        assert remaining == [survivor_product]

    def test_delete_producer_without_products(self, producer_repository, make_producer):
        producer_id = make_producer()

        with get_db_session() as db:
            assert producer_repository.delete_producer(db, producer_id) is True
            assert producer_repository.get_producer_by_id(db, producer_id) is None

    def test_delete_missing_producer_returns_false(self, producer_repository):
        with get_db_session() as db:
            assert producer_repository.delete_producer(db, 999) is False

    def test_count_products_by_producer(self, producer_repository, make_producer, make_product):
        a = make_producer(name="A")
        b = make_producer(name="B")
        make_product(a)
        make_product(a)
        make_product(b)

        with get_db_session() as db:
            counts = producer_repository.count_products_by_producer(db)

        assert counts == {a: 2, b: 1}


def _error_logged(caplog, prefix):
    return any(r.levelno == logging.ERROR and prefix in r.getMessage() for r in caplog.records)


class TestFailureLogging:
    """Every failure path of both repositories leaves an ERROR record."""

    @pytest.mark.parametrize("call", [
        lambda repo, db: repo.get_all(db),
        lambda repo, db: repo.get_by_producer(db, 1),
        lambda repo, db: repo.get_product_by_id(db, 1),
        lambda repo, db: repo.create(db, Product(name="Milk", description="", producer_id=1)),
        lambda repo, db: repo.update(db, Product(product_id=1, name="Milk", description="", producer_id=1)),
        lambda repo, db: repo.delete(db, 1),
    ], ids=["get_all", "get_by_producer", "get_product_by_id", "create", "update", "delete"])
    def test_product_repository_logs_failures(self, product_repository, caplog, call):
        caplog.set_level(logging.ERROR, logger="FoodRegistry")

        result = call(product_repository, _broken_session())

        assert result in (None, False)
        assert _error_logged(caplog, "[ProductRepository]")

    @pytest.mark.parametrize("call", [
        lambda repo, db: repo.get_all_producers(db),
        lambda repo, db: repo.count_products_by_producer(db),
        lambda repo, db: repo.get_producer_by_id(db, 1),
        lambda repo, db: repo.create_producer(db, Producer(name="Farm")),
        lambda repo, db: repo.update_producer(db, Producer(producer_id=1, name="Farm")),
        lambda repo, db: repo.delete_producer(db, 1),
    ], ids=["get_all_producers", "count_products", "get_producer_by_id", "create", "update", "delete"])
    def test_producer_repository_logs_failures(self, producer_repository, caplog, call):
        caplog.set_level(logging.ERROR, logger="FoodRegistry")

        result = call(producer_repository, _broken_session())

        assert result in (None, False, [], {})
        assert _error_logged(caplog, "[ProducerRepository]")

    def test_missing_producer_delete_logs_warning(self, producer_repository, caplog):
        caplog.set_level(logging.WARNING, logger="FoodRegistry")

        with get_db_session() as db:
            assert producer_repository.delete_producer(db, 4711) is False

        assert any(r.levelno == logging.WARNING and "4711" in r.getMessage() for r in caplog.records)


class TestProducerDeleteAtomicity:
    """delete_producer removes products and producer with one commit."""

    def test_commits_once(self, producer_repository, make_producer, make_product):
        producer_id = make_producer()
        make_product(producer_id, name="Milk")
        make_product(producer_id, name="Cream")

        with get_db_session() as db:
            with patch.object(db, "commit", wraps=db.commit) as commit:
                assert producer_repository.delete_producer(db, producer_id) is True
            assert commit.call_count == 1

    def test_failed_commit_keeps_producer_and_products(self, producer_repository, product_repository,
                                                        make_producer, make_product):
        producer_id = make_producer()
        product_ids = [make_product(producer_id, name=name) for name in ("Milk", "Cream", "Butter")]
        failure = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with get_db_session() as db:
            with patch.object(db, "commit", side_effect=failure) as commit:
                assert producer_repository.delete_producer(db, producer_id) is False
            assert commit.call_count == 1

        with get_db_session() as db:
            assert producer_repository.get_producer_by_id(db, producer_id) is not None
            remaining = [p.product_id for p in product_repository.get_by_producer(db, producer_id)]
        assert remaining == product_ids
