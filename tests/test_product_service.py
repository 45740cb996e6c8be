"""Tests for the product service."""
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from catalog.models.product import Product
from catalog.models.product_image import ProductImage
from catalog.services import product_service
from catalog.services.product_service import MainImageMissing


def test_list_page_windows(make_product):
    for i in range(10):
        make_product(name=f"P{i}")

    total = product_service.count()
    pages = product_service.page_count(4)
    assert total == 10
    assert pages == 3

    seen = []
    for page in range(1, pages + 1):
        items = product_service.list_page(page, 4)
        assert len(items) <= 4
        seen.extend(p.id for p in items)

    assert len(seen) == total
    assert len(set(seen)) == total
    assert seen == sorted(seen)


def test_list_page_out_of_range_is_empty(make_product):
    make_product()
    assert product_service.list_page(5, 4) == []


def test_list_page_below_one_is_first_page(make_product):
    first = make_product(name="first")
    make_product(name="second")
    items = product_service.list_page(0, 1)
    assert [p.id for p in items] == [first.id]


def test_soft_deleted_excluded_everywhere(make_product):
    visible = make_product(name="visible")
    hidden = make_product(name="hidden", soft_deleted=True)

    assert product_service.get_by_id(hidden.id) is None
    assert product_service.get_by_id(visible.id).name == "visible"
    assert [p.id for p in product_service.list_all()] == [visible.id]
    assert [p.id for p in product_service.list_page(1)] == [visible.id]
    assert product_service.count() == 1


def test_get_by_id_missing(db):
    assert product_service.get_by_id(12345) is None


def test_list_all_loads_category_and_images(make_product):
    make_product(images=("a.jpg", "b.jpg"))
    (product,) = product_service.list_all_with_images()
    assert product.category.name == "Bouquets"
    assert [img.name for img in product.images] == ["a.jpg", "b.jpg"]


def test_map_to_summary_uses_main_image(make_product):
    p = make_product(name="Roses", images=("side.jpg", "front.jpg"), main_index=1)
    (summary,) = product_service.map_to_summary([p])

    assert summary.id == p.id
    assert summary.name == "Roses"
    assert summary.image == "front.jpg"
    assert summary.category == "Bouquets"
    assert summary.price == Decimal("10.00")


def test_map_to_summary_without_main_image_raises(make_product):
    p = make_product(images=("a.jpg",), main_index=None)
    with pytest.raises(MainImageMissing) as exc:
        product_service.map_to_summary([p])
    assert exc.value.product_id == p.id


def test_map_to_detail(make_product):
    p = make_product(images=("a.jpg", "b.jpg"))
    detail = product_service.map_to_detail(p)

    assert detail.name == p.name
    assert detail.category == "Bouquets"
    assert detail.category_id == p.category_id
    assert [(i.image, i.is_main) for i in detail.images] == [("a.jpg", True), ("b.jpg", False)]


def test_new_product_flags_first_image_main(category):
    p = product_service.new_product("Lily", "White", Decimal("5.00"), category.id, ["1.jpg", "2.jpg"])
    assert [img.is_main for img in p.images] == [True, False]


def test_new_product_requires_images(category):
    with pytest.raises(ValueError):
        product_service.new_product("Lily", "White", Decimal("5.00"), category.id, [])


def test_create_persists_product_and_images(db, category):
    p = product_service.new_product("Lily", "White", Decimal("5.00"), category.id, ["1.jpg"])
    product_service.create(p)

    assert Product.query.count() == 1
    assert ProductImage.query.filter_by(product_id=p.id, is_main=True).count() == 1


def test_create_rolls_back_on_commit_failure(db, category):
    p = product_service.new_product("Lily", "White", Decimal("5.00"), category.id, ["1.jpg"])
    with patch.object(db.session, "commit", side_effect=SQLAlchemyError("boom")):
        with pytest.raises(SQLAlchemyError):
            product_service.create(p)

    assert Product.query.count() == 0


def test_update_leaves_images_alone(db, make_product):
    from catalog.models.category import Category

    other = Category(name="Plants")
    db.session.add(other)
    db.session.commit()

    p = make_product(images=("a.jpg",))
    product_service.update(p, "Renamed", p.description, Decimal("1.50"), other.id)

    fresh = product_service.get_by_id(p.id)
    assert fresh.name == "Renamed"
    assert fresh.price == Decimal("1.50")
    assert fresh.category.name == "Plants"
    assert [img.name for img in fresh.images] == ["a.jpg"]


def test_delete_is_hard_delete(db, make_product):
    p = make_product(images=("a.jpg", "b.jpg"))
    product_id = p.id
    product_service.delete(p)

    assert db.session.get(Product, product_id) is None
    assert ProductImage.query.count() == 0


def test_soft_delete_and_stats(make_product):
    p = make_product()
    make_product(name="other")

    assert product_service.soft_delete(p.id).soft_deleted is True
    assert product_service.soft_delete(p.id) is None
    assert product_service.get_stats() == {"total": 2, "visible": 1, "soft_deleted": 1}
