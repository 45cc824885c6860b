from storeapi.extensions import db, new_object_id


class Variant(db.Model):
    __tablename__ = "variants"

    id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    product_id = db.Column(
        db.String(24),
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    color = db.Column(db.String(50), nullable=False)  # "Red"
    size = db.Column(db.String(20), nullable=False)  # "M", "42"
    stock = db.Column(db.Integer, nullable=False, default=0)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "color": self.color,
            "size": self.size,
            "stock": self.stock,
        }

    def __repr__(self):
        return f"<Variant {self.color}/{self.size} x{self.stock}>"
