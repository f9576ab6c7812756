"""
Flask Application Factory

Creates and configures the Flask application.
"""

from flask import Flask
from flask_cors import CORS

from tibiahouses.config import get_config
from tibiahouses.api.routes import register_routes
from tibiahouses.logging_config import setup_logging, get_logger
from tibiahouses.scraper import PageFetcher

logger = get_logger(__name__)


def create_app(test_config=None, session=None) -> Flask:
    """Create and configure the Flask application.

    Args:
        test_config: Optional test configuration dict.
        session: Optional HTTP session for upstream requests; tests pass a
            fake that serves saved pages.

    Returns:
        Configured Flask application.
    """
    config = get_config()

    setup_logging()

    app = Flask(__name__)

    app.config["DEBUG"] = config.api.debug
    app.config["JSON_SORT_KEYS"] = False
    app.config["MAX_WORKERS"] = config.upstream.max_workers
    app.config["FETCHER"] = PageFetcher(session=session, config=config.upstream)

    if test_config:
        app.config.update(test_config)

    CORS(app)

    register_routes(app)

    logger.info("Flask app created")
    return app


def run_server(host: str = None, port: int = None, debug: bool = None):
    """Run the Flask development server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        debug: Enable debug mode.
    """
    config = get_config()

    host = host or config.api.host
    port = port or config.api.port
    debug = debug if debug is not None else config.api.debug

    app = create_app()

    logger.info("Starting server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
