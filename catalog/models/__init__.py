from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.product_image import ProductImage

__all__ = ["Category", "Product", "ProductImage"]
