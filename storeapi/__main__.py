"""Entry point: ``python -m storeapi`` starts the API server."""
import logging

from storeapi import create_app

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    logger.info("Starting storeapi on port %s", app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"])
