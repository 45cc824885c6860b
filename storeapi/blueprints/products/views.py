"""Product endpoints, mounted at /products."""
from storeapi.blueprints.products import products_bp
from storeapi.extensions import db
from storeapi.schemas import Envelope, json_body, listing
from storeapi.services.product_service import ProductRepository
from storeapi.services.validation import require_product_fields, require_variant_fields


def _repo():
    return ProductRepository(db.session)


@products_bp.route("/", methods=["POST"], strict_slashes=False)
def create_product():
    """Create a product, optionally with inline variants."""
    body = json_body()
    require_product_fields(body)
    product = _repo().create(body)
    return Envelope(
        message="Product created successfully",
        status=201,
        data={"product": product.to_dict()},
    ).as_response()


@products_bp.route("/", methods=["GET"], strict_slashes=False)
def list_products():
    products = _repo().list_all()
    return listing("products", [p.to_dict() for p in products])


@products_bp.route("/projection/variants", methods=["GET"])
def list_variant_projection():
    """Name, category and variant color/size only; stock is never exposed."""
    products = _repo().list_variant_projection()
    return listing(
        "products",
        products,
        message="Products with variant details (color and size only)",
    )


@products_bp.route("/category/<category>", methods=["GET"])
def products_by_category(category):
    products = _repo().find_by_category(category)
    if not products:
        # An empty match is reported as 404, unlike the plain listing
        return Envelope(
            message=f"No products found in category: {category}",
            status=404,
            data={"products": []},
        ).as_response()
    return listing("products", [p.to_dict() for p in products], category=category)


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id):
    return _repo().get_by_id(product_id).to_dict()


@products_bp.route("/<product_id>", methods=["PUT"])
def update_product(product_id):
    """Partial update; a supplied variants list replaces the existing one."""
    body = json_body()
    product = _repo().update(product_id, body)
    return Envelope(
        message="Product updated successfully",
        status=200,
        data={"product": product.to_dict()},
    ).as_response()


@products_bp.route("/<product_id>/variants", methods=["POST"])
def add_variant(product_id):
    repo = _repo()
    body = json_body()
    repo.ensure_id(product_id)
    require_variant_fields(body)
    product = repo.add_variant(product_id, body)
    return Envelope(
        message="Variant added successfully",
        status=200,
        data={"product": product.to_dict()},
    ).as_response()


@products_bp.route("/<product_id>/variants/<variant_id>", methods=["DELETE"])
def delete_variant(product_id, variant_id):
    product = _repo().remove_variant(product_id, variant_id)
    return Envelope(
        message="Variant deleted successfully",
        status=200,
        data={"product": product.to_dict()},
    ).as_response()


@products_bp.route("/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    snapshot = _repo().delete(product_id)
    return Envelope(
        message="Product deleted successfully",
        status=200,
        data={"product": snapshot},
    ).as_response()
