from datetime import datetime, timezone
from storeapi.extensions import db, new_object_id, utc_isoformat


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    name = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(50), nullable=False, index=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Embedded sub-documents: owned, ordered, gone with the product
    variants = db.relationship(
        "Variant",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="Variant.sort_order",
    )

    def touch(self):
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self):
        """Full document view, variants included with stock."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "variants": [v.to_dict() for v in self.variants],
            "createdAt": utc_isoformat(self.created_at),
            "updatedAt": utc_isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Product {self.id}: {self.name}>"
