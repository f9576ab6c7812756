"""
API Routes for the Tibia Houses Service

Provides REST API endpoints for:
- Health checks
- Town listing
- House listings per world and town
"""

from typing import Any, Dict, List, Tuple

from flask import Blueprint, current_app, jsonify, request

from tibiahouses.core.models import ExtractionResult, ResidenceType
from tibiahouses.exceptions import (
    ContainerNotFound,
    MalformedDocument,
    TibiaHousesError,
    TownNotFound,
    UnexpectedContentType,
    Unreachable,
    UpstreamMaintenance,
    UpstreamRejected,
    ValidationError,
)
from tibiahouses.logging_config import get_logger
from tibiahouses.scraper import PageFetcher, list_towns, scrape_world

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")

# Page-level errors -> (HTTP status, error code); most specific first
ERROR_RESPONSES: List[Tuple[type, int, str]] = [
    (UpstreamMaintenance, 503, "upstream_maintenance"),
    (Unreachable, 504, "upstream_unreachable"),
    (UpstreamRejected, 502, "upstream_rejected"),
    (UnexpectedContentType, 502, "upstream_unexpected_content"),
    (MalformedDocument, 502, "upstream_malformed"),
    (ContainerNotFound, 502, "upstream_format_changed"),
    (TownNotFound, 404, "not_found"),
    (ValidationError, 400, "invalid_request"),
]


def get_fetcher() -> PageFetcher:
    """Return the fetcher bound to the current app."""
    return current_app.config["FETCHER"]


def _is_truthy(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@api.errorhandler(TibiaHousesError)
def handle_error(error: TibiaHousesError):
    """Translate page-level errors into JSON error responses."""
    for error_type, status_code, code in ERROR_RESPONSES:
        if isinstance(error, error_type):
            break
    else:
        status_code, code = 500, "internal_error"

    logger.error("Request failed with %s: %s", code, error.message)
    return jsonify({"status": "error", "error": code, "message": error.message}), status_code


# Health
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"})


# Towns
@api.route("/towns", methods=["GET"])
def get_towns():
    """List all towns that have houses."""
    towns = list_towns(get_fetcher())
    return jsonify({"status": "success", "towns": towns})


# Houses
@api.route("/worlds/<world>/houses", methods=["GET"])
def get_houses(world: str):
    """List houses of a world, optionally for one town and residence type.

    Query parameters:
        town: Town name; all towns when omitted.
        type: "house" or "guildhall"; both when omitted.
        diagnostics: Include row-level failures when truthy.
    """
    town = request.args.get("town")
    residence_type = request.args.get("type")
    diagnostics = _is_truthy(request.args.get("diagnostics", "false"))

    residence_types = [ResidenceType.parse(residence_type)] if residence_type else None
    towns = [town] if town else None

    results = scrape_world(
        world,
        towns=towns,
        residence_types=residence_types,
        fetcher=get_fetcher(),
        max_workers=current_app.config["MAX_WORKERS"],
    )

    body = _houses_body(world, results, diagnostics)
    response = jsonify(body)
    response.headers["X-Row-Failures"] = str(sum(len(r.failures) for r in results))
    return response


def _houses_body(world: str, results: List[ExtractionResult], diagnostics: bool) -> Dict[str, Any]:
    houses = [house.to_dict() for result in results for house in result.houses]
    body: Dict[str, Any] = {
        "status": "success",
        "world": world,
        "count": len(houses),
        "empty": not houses,
        "houses": houses,
    }
    if diagnostics:
        body["failures"] = [
            {"town": result.town, "type": result.residence_type.value, **failure.to_dict()}
            for result in results
            for failure in result.failures
        ]
    return body


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)
    logger.info("API routes registered")
