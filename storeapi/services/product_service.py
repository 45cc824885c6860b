import logging

from storeapi.extensions import db
from storeapi.models.product import Product
from storeapi.models.variant import Variant
from storeapi.services.repository import DocumentRepository
from storeapi.services.validation import (
    clean_product,
    clean_variant,
    ensure_object_id,
)

logger = logging.getLogger(__name__)


def _build_variants(variant_fields):
    return [
        Variant(sort_order=i, **fields) for i, fields in enumerate(variant_fields)
    ]


class ProductRepository(DocumentRepository):
    """Persistence operations over product documents and their variants."""

    model = Product
    label = "Product"
    invalid_id_message = "Invalid product ID format"

    def create(self, fields):
        """Validate and insert a product; inline variants get fresh ids."""
        cleaned = clean_product(fields)
        product = Product(
            name=cleaned["name"],
            price=cleaned["price"],
            category=cleaned["category"],
            variants=_build_variants(cleaned["variants"]),
        )
        self.session.add(product)
        self._commit("creating product")
        logger.info(
            "Created product %s with %d variant(s)", product.id, len(product.variants)
        )
        return product

    def find_by_category(self, category):
        """Case-insensitive substring match on category, newest first."""
        pattern = (
            category.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        )
        stmt = (
            db.select(Product)
            .where(Product.category.ilike(f"%{pattern}%", escape="\\"))
            .order_by(*self._newest_first())
        )
        return self._query(stmt, "fetching products by category").scalars().all()

    def update(self, product_id, fields):
        """Overwrite only the supplied fields.

        A supplied ``variants`` list replaces the whole sequence; the old
        variants are deleted and the new ones get fresh ids.
        """
        product = self._load(product_id)
        cleaned = clean_product(fields, partial=True)

        for key in ("name", "price", "category"):
            if key in cleaned:
                setattr(product, key, cleaned[key])
        if "variants" in cleaned:
            product.variants = _build_variants(cleaned["variants"])

        product.touch()
        self._commit("updating product")
        return product

    # -- variant collection -----------------------------------------------

    def add_variant(self, product_id, fields):
        """Append one variant to the end of the product's sequence."""
        product = self._load(product_id)
        cleaned = clean_variant(fields)
        product.variants.append(Variant(sort_order=len(product.variants), **cleaned))
        product.touch()
        self._commit("adding variant")
        return product

    def remove_variant(self, product_id, variant_id):
        """Drop the variant with ``variant_id``; an unknown id is not an error."""
        message = "Invalid product ID or variant ID format"
        ensure_object_id(product_id, message)
        ensure_object_id(variant_id, message)

        product = self._load(product_id)
        variant_id = variant_id.lower()
        kept = [v for v in product.variants if v.id != variant_id]
        if len(kept) != len(product.variants):
            for i, variant in enumerate(kept):
                variant.sort_order = i
            product.variants = kept
            product.touch()
        self._commit("deleting variant")
        return product

    def list_variant_projection(self):
        """Name, category and variant color/size for every product.

        Only those columns are selected, so stock never leaves the store.
        """
        products = self._query(
            db.select(Product.id, Product.name, Product.category).order_by(
                *self._newest_first()
            ),
            "fetching products with variant projection",
        ).all()
        variant_rows = self._query(
            db.select(Variant.product_id, Variant.id, Variant.color, Variant.size)
            .order_by(Variant.product_id, Variant.sort_order),
            "fetching products with variant projection",
        ).all()

        by_product = {}
        for row in variant_rows:
            by_product.setdefault(row.product_id, []).append(
                {"id": row.id, "color": row.color, "size": row.size}
            )

        return [
            {
                "id": row.id,
                "name": row.name,
                "category": row.category,
                "variants": by_product.get(row.id, []),
            }
            for row in products
        ]
