"""
Test Configuration Module

A small shop schema (brands -> products -> tags) stored in a temporary
SQLite file per test.
"""

import pytest

from simplesqlite.config import Settings
from simplesqlite.services import OperationNotifier, SQLiteOperations

from shop_models import Brand, Product, Tag


@pytest.fixture
def settings():
    """Settings independent of the environment running the tests"""
    return Settings(
        default_db_filename="DB.db3",
        echo_sql=False,
        foreign_keys=False,
        journal_mode="",
        log_level="DEBUG",
    )


@pytest.fixture
def db_path(tmp_path):
    """Database file inside a fresh temporary directory"""
    return str(tmp_path / "shop.db3")


@pytest.fixture
def missing_dir_path(tmp_path):
    """Database file whose directory does not exist"""
    return str(tmp_path / "does-not-exist" / "shop.db3")


@pytest.fixture
def notifier():
    return OperationNotifier()


@pytest.fixture
def events(notifier):
    """Every (records, table_name, operation) published by the notifier"""
    received = []
    notifier.subscribe(lambda records, table_name, operation: received.append((records, table_name, operation)))
    return received


@pytest.fixture
def ops(notifier, settings):
    return SQLiteOperations(notifier=notifier, settings=settings)


@pytest.fixture
def strict_ops(notifier, settings):
    """Operations on connections that enforce foreign keys"""
    return SQLiteOperations(notifier=notifier, settings=settings.model_copy(update={"foreign_keys": True}))


@pytest.fixture
def products():
    """The three products of the shop scenario, not yet stored"""
    return [
        Product(name="refrescos", price=20.0),
        Product(name="jugos", price=25.0),
        Product(name="cervezas", price=30.0),
    ]


@pytest.fixture
def brand_with_products(ops, db_path):
    """A stored brand owning two products, the first one tagged twice"""
    brand = Brand(
        name="Cocacola",
        products=[
            Product(name="refrescos", price=20.0, tags=[Tag(tag="cold"), Tag(tag="sweet")]),
            Product(name="jugos", price=25.0),
        ],
    )
    ops.insert(brand, db_path)
    return brand
