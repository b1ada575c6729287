"""
Flask Application Factory

Creates and configures the Flask application. The listings file is loaded
once here; a failed load aborts startup.
"""

from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from canhousing.config import get_config
from canhousing.api.routes import register_routes
from canhousing.core.loader import load_dataset
from canhousing.core.models import WorkingDataset
from canhousing.exceptions import DatasetError
from canhousing.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(dataset: Optional[WorkingDataset] = None, test_config=None) -> Flask:
    """Create and configure the Flask application.

    Args:
        dataset: Pre-loaded working dataset. Loaded from config if omitted.
        test_config: Optional test configuration dict.

    Returns:
        Configured Flask application.

    Raises:
        DatasetError: If the listings file cannot be loaded.
    """
    config = get_config()

    setup_logging()

    if dataset is None:
        dataset = load_dataset()

    app = Flask(__name__)
    app.config["DEBUG"] = config.api.debug
    app.config["JSON_SORT_KEYS"] = False

    if test_config:
        app.config.update(test_config)

    CORS(app)

    register_routes(app, dataset)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"status": "error", "error": "Not found"}), 404

    @app.errorhandler(DatasetError)
    def dataset_unavailable(e):
        logger.error("Dataset unavailable: %s", e.message)
        return jsonify({"status": "error", "error": e.message}), 503

    logger.info("Flask app created with %d listings", len(dataset))
    return app


def run_server(host: str = None, port: int = None, debug: bool = None, data_path: str = None):
    """Run the Flask development server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        debug: Enable debug mode.
        data_path: Listings CSV to load instead of the configured one.

    Raises:
        DatasetError: If the listings file cannot be loaded.
    """
    config = get_config()

    host = host or config.api.host
    port = port or config.api.port
    debug = debug if debug is not None else config.api.debug

    try:
        dataset = load_dataset(data_path) if data_path else None
        app = create_app(dataset=dataset)
    except DatasetError as e:
        logger.error("Cannot start dashboard: %s", e.message)
        raise

    logger.info("Starting server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
