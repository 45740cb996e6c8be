from decimal import Decimal

import pytest

from catalog import create_app
from catalog.extensions import db as _db
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.product_image import ProductImage


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture(autouse=True)
def image_root(app, tmp_path):
    """Point IMAGE_ROOT at a fresh directory for every test."""
    root = tmp_path / "img"
    root.mkdir()
    app.config["IMAGE_ROOT"] = str(root)
    return root


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    """Database with empty tables; rebuilt after each test."""
    yield _db
    _db.session.remove()
    _db.drop_all()
    _db.create_all()


@pytest.fixture
def category(db):
    c = Category(name="Bouquets")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def make_product(db, category):
    """Factory for committed products. The first image is main unless told otherwise."""

    def _make(name="Tulips", price=Decimal("10.00"), images=("a.jpg",), main_index=0,
              soft_deleted=False, category_id=None):
        product = Product(
            name=name,
            description=f"{name} description",
            price=price,
            category_id=category_id or category.id,
            soft_deleted=soft_deleted,
            images=[
                ProductImage(name=img, is_main=(i == main_index))
                for i, img in enumerate(images)
            ],
        )
        db.session.add(product)
        db.session.commit()
        return product

    return _make
