import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload

from catalog.extensions import db
from catalog.models.product import Product
from catalog.models.product_image import ProductImage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 4


class MainImageMissing(LookupError):
    """A product has no image flagged as main."""

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} has no main image")
        self.product_id = product_id


@dataclass(frozen=True)
class ProductSummary:
    """One row of the product list."""

    id: int
    name: str
    description: str
    price: Decimal
    image: str
    category: str


@dataclass(frozen=True)
class ProductImageView:
    image: str
    is_main: bool


@dataclass(frozen=True)
class ProductDetail:
    id: int
    name: str
    description: str
    price: Decimal
    category: str
    category_id: int
    images: List[ProductImageView] = field(default_factory=list)


def _visible_products():
    """Products with category and images loaded, soft-deleted rows excluded."""
    return Product.query.options(
        joinedload(Product.category),
        selectinload(Product.images),
    ).filter(Product.soft_deleted.is_(False))


def list_all():
    """All visible products ordered by id."""
    return _visible_products().order_by(Product.id).all()


list_all_with_images = list_all


def list_page(page, page_size=DEFAULT_PAGE_SIZE):
    """One window of the product list.

    Ordered by id so consecutive pages never overlap. Pages below 1 are
    treated as page 1; pages past the end are empty.
    """
    skip = max(page - 1, 0) * page_size
    return (
        _visible_products()
        .order_by(Product.id)
        .offset(skip)
        .limit(page_size)
        .all()
    )


def count():
    """Number of visible products (same filter as the list pages)."""
    return Product.query.filter(Product.soft_deleted.is_(False)).count()


def page_count(page_size=DEFAULT_PAGE_SIZE):
    return math.ceil(count() / page_size)


def get_by_id(product_id):
    """Single visible product, or None if absent or soft-deleted."""
    return _visible_products().filter(Product.id == product_id).first()


def new_product(name, description, price, category_id, image_names):
    """Assemble an unsaved product; the first image becomes the main one.

    Raises:
        ValueError: if ``image_names`` is empty
    """
    if not image_names:
        raise ValueError("A product needs at least one image")

    images = [
        ProductImage(name=image_name, is_main=(i == 0))
        for i, image_name in enumerate(image_names)
    ]
    return Product(
        name=name,
        description=description,
        price=price,
        category_id=category_id,
        images=images,
    )


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise


def create(product):
    """Persist a product together with its image rows."""
    db.session.add(product)
    _commit()
    logger.info(
        "Created product %s (%s) with %d image(s)",
        product.id, product.name, len(product.images),
    )
    return product


def update(product, name, description, price, category_id):
    """Overwrite the editable fields of an existing product. Images are untouched."""
    product.name = name
    product.description = description
    product.price = price
    product.category_id = category_id
    _commit()
    logger.info("Updated product %s", product.id)
    return product


def delete(product):
    """Hard-delete a product; image rows go with it.

    Image files on disk are the caller's responsibility.
    """
    product_id = product.id
    db.session.delete(product)
    _commit()
    logger.info("Deleted product %s", product_id)


def map_to_summary(products):
    """Project products into list rows.

    Raises:
        MainImageMissing: if a product has no image flagged as main
    """
    summaries = []
    for product in products:
        main = product.main_image
        if main is None:
            raise MainImageMissing(product.id)
        summaries.append(
            ProductSummary(
                id=product.id,
                name=product.name,
                description=product.description,
                price=product.price,
                image=main.name,
                category=product.category.name,
            )
        )
    return summaries


def map_to_detail(product):
    return ProductDetail(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category.name,
        category_id=product.category_id,
        images=[ProductImageView(image=img.name, is_main=img.is_main) for img in product.images],
    )


def get_stats():
    """Product counts for the `stats` CLI command."""
    total = Product.query.count()
    hidden = Product.query.filter(Product.soft_deleted.is_(True)).count()
    return {"total": total, "visible": total - hidden, "soft_deleted": hidden}


def soft_delete(product_id):
    """Flag a product as soft-deleted. Returns the product or None."""
    product = get_by_id(product_id)
    if product is None:
        return None
    product.soft_deleted = True
    _commit()
    logger.info("Soft-deleted product %s", product_id)
    return product
