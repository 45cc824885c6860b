import os
from flask import Flask
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()


def create_app(config_name=None):
    flask_app = Flask(__name__)

    explicit = config_name or os.environ.get("FLASK_ENV")
    config_name = explicit or "development"

    from storeapi.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)
    # Exception text in 500 bodies only when development was asked for
    flask_app.config["SHOW_ERROR_DETAILS"] = explicit == "development"

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Documents keep their field order on the wire
    flask_app.json.sort_keys = False

    # Initialize extensions
    from storeapi.extensions import db, migrate

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    # Import models so Alembic sees them
    from storeapi.models import Product, Variant, Student  # noqa: F401

    # Register blueprints
    from storeapi.blueprints.products import products_bp
    from storeapi.blueprints.students import students_bp

    flask_app.register_blueprint(students_bp, url_prefix="/students")
    flask_app.register_blueprint(products_bp, url_prefix="/products")

    register_error_handlers(flask_app)

    # Register CLI commands
    from storeapi.cli import register_cli

    register_cli(flask_app)

    @flask_app.route("/")
    def index():
        return {
            "message": "API Server is running",
            "endpoints": {"students": "/students", "products": "/products"},
        }

    # Health check
    @flask_app.route("/health")
    def health():
        checks = {"status": "ok"}
        try:
            db.session.execute(db.text("SELECT 1"))
            checks["db"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check DB query failed")
            db.session.rollback()
            checks["db"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app


def register_error_handlers(flask_app):
    """Render every failure as a ``{message, ...}`` JSON envelope."""
    from storeapi.errors import ApiError

    @flask_app.errorhandler(ApiError)
    def api_error(e):
        return e.to_dict(), e.status_code

    @flask_app.errorhandler(404)
    @flask_app.errorhandler(405)
    def route_not_found(e):
        return {"message": "Route not found"}, 404

    @flask_app.errorhandler(HTTPException)
    def http_error(e):
        return {"message": e.description}, e.code

    @flask_app.errorhandler(Exception)
    def unhandled_error(e):
        flask_app.logger.exception("Unhandled error on request")
        detail = str(e) if flask_app.config.get("SHOW_ERROR_DETAILS") else {}
        return {"message": "Internal Server Error", "error": detail}, 500
