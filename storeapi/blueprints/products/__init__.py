from flask import Blueprint

products_bp = Blueprint("products", __name__)

from storeapi.blueprints.products import views  # noqa: F401, E402
