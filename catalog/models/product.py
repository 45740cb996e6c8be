from datetime import datetime, timezone
from catalog.extensions import db


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    price = db.Column(db.Numeric(10, 2), nullable=False)
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    soft_deleted = db.Column(
        db.Boolean, nullable=False, default=False, index=True
    )
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    category = db.relationship("Category", back_populates="products")
    images = db.relationship(
        "ProductImage",
        back_populates="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="ProductImage.id",
    )

    @property
    def main_image(self):
        """The image flagged as main, or None when no image carries the flag."""
        return next((img for img in self.images if img.is_main), None)

    def __repr__(self):
        return f"<Product {self.id}: {self.name}>"
