from storeapi.models.product import Product
from storeapi.models.variant import Variant
from storeapi.models.student import Student

__all__ = ["Product", "Variant", "Student"]
