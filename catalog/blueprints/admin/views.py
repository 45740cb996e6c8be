"""Admin pages for managing the product catalog."""
import logging

from flask import (
    abort,
    current_app,
    redirect,
    render_template,
    request,
    send_from_directory,
    url_for,
)

from catalog import csrf
from catalog.blueprints.admin import admin_bp
from catalog.blueprints.admin.forms import parse_product_form
from catalog.services import category_service, product_service, storage_service
from catalog.services.product_service import MainImageMissing
from catalog.services.storage_service import ImageValidationError

logger = logging.getLogger(__name__)

admin_bp.before_request(csrf.protect)


@admin_bp.errorhandler(MainImageMissing)
def main_image_missing(e):
    logger.error("Cannot list products: %s", e)
    return f"Product {e.product_id} has no main image", 500


# ---------------------------------------------------------------------------
# List / detail
# ---------------------------------------------------------------------------

@admin_bp.route("/product/")
def index():
    """Paginated product list."""
    page = request.args.get("page", 1, type=int)
    page_size = current_app.config["PRODUCTS_PER_PAGE"]

    products = product_service.list_page(page, page_size)
    summaries = product_service.map_to_summary(products)

    return render_template(
        "admin/product/index.html",
        products=summaries,
        page_count=product_service.page_count(page_size),
        current_page=max(page, 1),
    )


@admin_bp.route("/product/detail/", defaults={"product_id": None})
@admin_bp.route("/product/detail/<int:product_id>")
def detail(product_id):
    if product_id is None:
        abort(400)

    product = product_service.get_by_id(product_id)
    if product is None:
        abort(404)

    return render_template(
        "admin/product/detail.html",
        product=product_service.map_to_detail(product),
    )


@admin_bp.route("/images/<path:name>")
def image(name):
    """Serve an uploaded product image from IMAGE_ROOT."""
    return send_from_directory(storage_service.image_root(), name)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def _render_create(form=None, errors=None):
    form = form or {}
    return render_template(
        "admin/product/create.html",
        form=form,
        errors=errors or {},
        categories=category_service.get_select_options(form.get("category_id")),
    )


@admin_bp.route("/product/create", methods=["GET"])
def create():
    return _render_create()


@admin_bp.route("/product/create", methods=["POST"])
def create_post():
    data, errors = parse_product_form(request.form, request.files, require_images=True)
    if errors:
        logger.info("Rejected product create: %s", ", ".join(sorted(errors)))
        return _render_create(data, errors)

    # All files are checked before any is written
    try:
        storage_service.validate_images(data["images"])
    except ImageValidationError as e:
        logger.info("Rejected product create: %s (%s)", e.message, e.field)
        return _render_create(data, {e.field: e.message})

    with storage_service.ImageBatch(data["images"]) as image_names:
        product = product_service.new_product(
            name=data["name"],
            description=data["description"],
            price=data["price_value"],
            category_id=data["category_id"],
            image_names=image_names,
        )
        product_service.create(product)

    return redirect(url_for("admin.index"))


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@admin_bp.route("/product/delete/", defaults={"product_id": None}, methods=["POST"])
@admin_bp.route("/product/delete/<int:product_id>", methods=["POST"])
def delete(product_id):
    if product_id is None:
        product_id = request.form.get("id", type=int)
    if product_id is None:
        abort(400)

    product = product_service.get_by_id(product_id)
    if product is None:
        abort(404)

    storage_service.delete_many([img.name for img in product.images])
    product_service.delete(product)

    return redirect(url_for("admin.index"))


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------

def _render_edit(product_id, form, errors=None, images=None):
    return render_template(
        "admin/product/edit.html",
        product_id=product_id,
        form=form,
        errors=errors or {},
        images=images or [],
        categories=category_service.get_select_options(form.get("category_id")),
    )


@admin_bp.route("/product/edit/", defaults={"product_id": None}, methods=["GET"])
@admin_bp.route("/product/edit/<int:product_id>", methods=["GET"])
def edit(product_id):
    if product_id is None:
        abort(400)

    product = product_service.get_by_id(product_id)
    if product is None:
        abort(404)

    detail = product_service.map_to_detail(product)
    form = {
        "name": detail.name,
        "description": detail.description,
        "price": f"{detail.price:.2f}",
        "category_id": detail.category_id,
    }
    return _render_edit(product_id, form, images=detail.images)


@admin_bp.route("/product/edit/", defaults={"product_id": None}, methods=["POST"])
@admin_bp.route("/product/edit/<int:product_id>", methods=["POST"])
def edit_post(product_id):
    if product_id is None:
        abort(400)

    data, errors = parse_product_form(request.form)
    if errors:
        logger.info("Rejected edit of product %s: %s", product_id, ", ".join(sorted(errors)))
        product = product_service.get_by_id(product_id)
        images = product_service.map_to_detail(product).images if product else []
        return _render_edit(product_id, data, errors, images)

    product = product_service.get_by_id(product_id)
    if product is None:
        abort(404)

    product_service.update(
        product,
        name=data["name"],
        description=data["description"],
        price=data["price_value"],
        category_id=data["category_id"],
    )
    return redirect(url_for("admin.index"))
