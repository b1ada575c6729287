"""
API Routes for the Housing Dashboard

Provides REST API endpoints for:
- Health and dataset options (provinces, cities, price bounds)
- Dashboard state for the caller's session
- Filter changes
- Plotly chart figures and the styled summary table
"""

import threading
from typing import Dict

from flask import Blueprint, Response, current_app, jsonify, request

from canhousing.config import get_config
from canhousing.core.models import WorkingDataset
from canhousing.dashboard.charts import CHART_NAMES, build_chart, summary_payload
from canhousing.dashboard.session import DashboardSession
from canhousing.exceptions import ValidationError
from canhousing.logging_config import get_logger

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")

SESSION_HEADER = "X-Session-Id"
DEFAULT_SESSION = "default"
REGISTRY_KEY = "canhousing.sessions"


class SessionRegistry:
    """One DashboardSession per client id, all sharing the same dataset."""

    def __init__(self, dataset: WorkingDataset):
        self.dataset = dataset
        self._sessions: Dict[str, DashboardSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> DashboardSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                logger.info("Starting dashboard session %s", session_id)
                session = DashboardSession(self.dataset)
                self._sessions[session_id] = session
            return session

    def __len__(self) -> int:
        return len(self._sessions)


def _registry() -> SessionRegistry:
    return current_app.extensions[REGISTRY_KEY]


def _session() -> DashboardSession:
    session_id = request.headers.get(SESSION_HEADER, DEFAULT_SESSION).strip() or DEFAULT_SESSION
    return _registry().get(session_id)


def _wants_listings() -> bool:
    return request.args.get("listings", "false").lower() == "true"


# Health & Options Endpoints
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    dataset = _registry().dataset
    return jsonify({
        "status": "healthy",
        "listings": len(dataset),
        "source": dataset.source,
        "income_synthesized": dataset.income_synthesized,
    })


@api.route("/options", methods=["GET"])
def get_options():
    """Choices for the filter controls."""
    try:
        dataset = _registry().dataset
        price_min, price_max = dataset.price_bounds
        return jsonify({
            "status": "success",
            "provinces": list(dataset.provinces),
            "cities": list(dataset.cities),
            "cities_by_province": {
                province: list(cities)
                for province, cities in dataset.cities_by_province.items()
            },
            "price_bounds": [price_min, price_max],
        })
    except Exception as e:
        logger.error("Error building options: %s", e)
        return jsonify({"status": "error", "error": str(e)}), 500


# Dashboard Endpoints
@api.route("/dashboard", methods=["GET"])
def get_dashboard():
    """Current outputs for the caller's session."""
    try:
        outputs = _session().outputs
        return jsonify({
            "status": "success",
            "dashboard": outputs.to_dict(include_listings=_wants_listings()),
        })
    except Exception as e:
        logger.error("Error fetching dashboard: %s", e)
        return jsonify({"status": "error", "error": str(e)}), 500


@api.route("/dashboard/constraints", methods=["POST"])
def update_constraints():
    """Apply filter changes and return the recomputed outputs."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            "status": "error",
            "error": "Request body must be a non-empty JSON object",
        }), 400

    try:
        outputs = _session().update(**data)
    except ValidationError as e:
        return jsonify({
            "status": "error",
            "error": e.message,
            "field": e.field,
        }), 400
    except Exception as e:
        logger.error("Error updating constraints: %s", e, exc_info=True)
        return jsonify({"status": "error", "error": str(e)}), 500

    return jsonify({
        "status": "success",
        "dashboard": outputs.to_dict(include_listings=_wants_listings()),
    })


@api.route("/dashboard/charts", methods=["GET"])
def list_charts():
    """Names accepted by the chart endpoint."""
    return jsonify({"status": "success", "charts": list(CHART_NAMES)})


@api.route("/dashboard/charts/<name>", methods=["GET"])
def get_chart(name: str):
    """Plotly figure JSON for one chart."""
    if name not in CHART_NAMES:
        return jsonify({"status": "error", "error": f"Unknown chart: {name}"}), 404

    try:
        bin_width = request.args.get(
            "bin_width", get_config().dashboard.histogram_bin_width, type=float
        )
        if bin_width is None or bin_width <= 0:
            return jsonify({"status": "error", "error": "bin_width must be positive"}), 400
        fig = build_chart(name, _session().outputs, bin_width=bin_width)
        return Response(fig.to_json(), mimetype="application/json")
    except Exception as e:
        logger.error("Error building chart %s: %s", name, e)
        return jsonify({"status": "error", "error": str(e)}), 500


@api.route("/dashboard/summary", methods=["GET"])
def get_summary():
    """Summary table rows with per-cell styles."""
    try:
        outputs = _session().outputs
        return jsonify({
            "status": "success",
            "revision": outputs.revision,
            "rows": summary_payload(outputs.summary),
        })
    except Exception as e:
        logger.error("Error fetching summary: %s", e)
        return jsonify({"status": "error", "error": str(e)}), 500


@api.route("/dashboard/comparison", methods=["GET"])
def get_comparison():
    """Two-city price comparison, or a warning if the selection is invalid."""
    outputs = _session().outputs
    if outputs.comparison is None:
        return jsonify({
            "status": "warning",
            "comparison": None,
            "notifications": [note.to_dict() for note in outputs.notifications],
        })
    return jsonify({
        "status": "success",
        "comparison": outputs.comparison.to_dict(),
    })


def register_routes(app, dataset: WorkingDataset):
    """Register API routes with Flask app."""
    app.extensions[REGISTRY_KEY] = SessionRegistry(dataset)
    app.register_blueprint(api)
    logger.info("API routes registered")
