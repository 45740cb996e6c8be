"""Parsing and validation of the product create/edit forms."""
import re
from decimal import Decimal, ROUND_HALF_UP

from catalog.services import category_service

MAX_NAME_LENGTH = 255
MAX_PRICE = Decimal("99999999.99")  # fits Numeric(10, 2)

# One optional decimal separator, either "." or ","; no grouping
_PRICE_RE = re.compile(r"^\d+(?:[.,]\d+)?$")


def parse_price(raw):
    """Parse a price typed into the create or edit form.

    "19.990" -> Decimal("19.99"), "19,99" -> Decimal("19.99").

    Raises:
        ValueError on anything that isn't a non-negative decimal
    """
    candidate = str(raw if raw is not None else "").strip()
    if not _PRICE_RE.match(candidate):
        raise ValueError("Price must be a number")

    price = Decimal(candidate.replace(",", ".")).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    if price > MAX_PRICE:
        raise ValueError("Price is too large")
    return price


def parse_product_form(form, files=None, require_images=False):
    """Read the product form fields and collect every field error.

    Returns:
        (data, errors) where ``data`` keeps the raw values for redisplay plus
        ``price_value`` (Decimal or None) and ``images`` (non-empty uploads),
        and ``errors`` maps field name to message.
    """
    data = {
        "name": form.get("name", "").strip(),
        "description": form.get("description", "").strip(),
        "price": form.get("price", "").strip(),
        "price_value": None,
        "category_id": form.get("category_id", type=int),
        "images": [],
    }
    errors = {}

    if not data["name"]:
        errors["name"] = "Name is required"
    elif len(data["name"]) > MAX_NAME_LENGTH:
        errors["name"] = f"Name must be at most {MAX_NAME_LENGTH} characters"

    if not data["description"]:
        errors["description"] = "Description is required"

    try:
        data["price_value"] = parse_price(data["price"])
    except ValueError as e:
        errors["price"] = str(e)

    if category_service.get_by_id(data["category_id"]) is None:
        errors["category_id"] = "Category is required"

    if files is not None:
        # Browsers send an empty part when no file was chosen
        data["images"] = [f for f in files.getlist("images") if f and f.filename]
    if require_images and not data["images"]:
        errors["images"] = "At least one image is required"

    return data, errors
