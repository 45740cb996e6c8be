"""Flask CLI commands for admin operations."""
import click
from flask import current_app


DEMO_PRODUCTS = [
    ("Red Rose Bouquet", "Twelve long-stem red roses.", "45.00", "Bouquets", ["c0392b", "922b21"]),
    ("White Lily Bunch", "Fragrant oriental lilies.", "32.50", "Bouquets", ["ecf0f1"]),
    ("Peace Lily", "Easy-care indoor plant in a ceramic pot.", "28.90", "Plants", ["27ae60"]),
    ("Succulent Trio", "Three succulents in matching pots.", "19.99", "Plants", ["16a085", "1abc9c"]),
    ("Scented Candle", "Soy wax, peony scent.", "14.00", "Gifts", ["f39c12"]),
    ("Dried Flower Wreath", "Lavender and eucalyptus wreath.", "39.00", "Decor", ["8e44ad"]),
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables and seed default categories."""
        from catalog.extensions import db
        from catalog.services import category_service

        db.create_all()

        created = 0
        for name in current_app.config["DEFAULT_CATEGORIES"]:
            _, was_created = category_service.get_or_create(name)
            created += int(was_created)

        click.echo(f"Database initialized ({created} new categories).")

    @app.cli.command("create-category")
    @click.argument("name")
    def create_category(name):
        """Add a product category."""
        from catalog.services import category_service

        try:
            category, created = category_service.get_or_create(name)
        except ValueError as e:
            raise click.BadParameter(str(e))
        if created:
            click.echo(f"Created category {category.id}: {category.name}")
        else:
            click.echo(f"Category already exists: {category.id}: {category.name}")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed demo products with generated placeholder images (idempotent)."""
        from decimal import Decimal
        from catalog.models.product import Product
        from catalog.services import (
            category_service,
            image_service,
            product_service,
            storage_service,
        )

        # Only seed if no products exist yet
        if Product.query.first():
            click.echo("Products already exist — skipping demo seed.")
            return

        for name, description, price, category_name, colors in DEMO_PRODUCTS:
            category, _ = category_service.get_or_create(category_name)
            image_names = []
            for color in colors:
                image_name = storage_service.generate_file_name(f"{color}.jpg")
                storage_service.write_bytes(
                    image_name, image_service.create_placeholder(color, text=name)
                )
                image_names.append(image_name)

            product_service.create(
                product_service.new_product(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    category_id=category.id,
                    image_names=image_names,
                )
            )
        click.echo(f"Seeded {len(DEMO_PRODUCTS)} demo products.")

    @app.cli.command("soft-delete")
    @click.argument("product_id", type=int)
    def soft_delete(product_id):
        """Hide a product from the admin list without removing it."""
        from catalog.services import product_service

        product = product_service.soft_delete(product_id)
        if product is None:
            click.echo(f"Product {product_id} not found.")
            return
        click.echo(f"Soft-deleted product {product_id}: {product.name}")

    @app.cli.command("stats")
    def stats():
        """Show product statistics."""
        from catalog.services.product_service import get_stats

        s = get_stats()
        click.echo(f"Total products: {s['total']}")
        click.echo(f"  visible: {s['visible']}")
        click.echo(f"  soft_deleted: {s['soft_deleted']}")
