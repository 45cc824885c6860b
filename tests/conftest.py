import pytest
from storeapi import create_app
from storeapi.extensions import db as _db


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture(autouse=True)
def _empty_tables(app):
    """Every test starts and ends with empty collections."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture
def shoe():
    return {
        "name": "Shoe",
        "price": 50,
        "category": "Footwear",
        "variants": [{"color": "red", "size": "M", "stock": 5}],
    }
