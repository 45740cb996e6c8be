from catalog.extensions import db


class ProductImage(db.Model):
    __tablename__ = "product_images"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(512), nullable=False)  # file name under IMAGE_ROOT
    is_main = db.Column(db.Boolean, nullable=False, default=False)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product = db.relationship("Product", back_populates="images")

    def __repr__(self):
        flag = " main" if self.is_main else ""
        return f"<ProductImage {self.name}{flag}>"
