from flask import Blueprint

students_bp = Blueprint("students", __name__)

from storeapi.blueprints.students import views  # noqa: F401, E402
