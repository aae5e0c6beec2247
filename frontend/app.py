"""
Flask application for the Job Application Tracker.

Serves the JSON API for job cards and a server-rendered Kanban board:
- GET/POST        {API_PREFIX}/jobs
- GET/PUT/DELETE  {API_PREFIX}/jobs/<job_id>
- GET             {API_PREFIX}/jobs/statuses
- GET             /health
- GET             /            (board page)

Stack: Flask + PyMongo + Jinja templates
"""

from functools import wraps

from flask import Blueprint, Flask, jsonify, render_template, request

from src.board.state import group_by_status, normalize_card
from src.common.config import Config
from src.common.error_handling import (
    JobNotFoundError,
    JobValidationError,
    error_response,
)
from src.common.job_model import STATUSES
from src.common.logger import get_logger, setup_logging
from src.common.repositories import JobRepositoryInterface, get_job_repository
from src.services.job_service import JobService
from version import __version__ as APP_VERSION

# MONGODB_URI is required: refuse to start without it
Config.validate()

setup_logging(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)
logger = get_logger(__name__, context="api")

app = Flask(__name__)
jobs_bp = Blueprint("jobs", __name__, url_prefix=Config.API_PREFIX)


@app.context_processor
def inject_version():
    """Inject version info into all templates."""
    return {"version": APP_VERSION}


def _get_repo() -> JobRepositoryInterface:
    """Get the shared job repository (lazily connected singleton)."""
    return get_job_repository()


def _get_service() -> JobService:
    return JobService(_get_repo())


# ============================================================================
# Error handling
# ============================================================================

def api_errors(failure_message: str):
    """
    Decorator mapping tracker errors to JSON responses.

    JobValidationError -> 400 with field-level errors
    JobNotFoundError   -> 404
    anything else      -> 500 with failure_message
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except Exception as e:
                if isinstance(e, JobValidationError):
                    logger.warning(f"{request.method} {request.path}: {e}")
                elif isinstance(e, JobNotFoundError):
                    logger.info(f"{request.method} {request.path}: {e}")
                else:
                    logger.exception(f"{request.method} {request.path}: {failure_message}")
                body, status = error_response(e, failure_message)
                return jsonify(body), status
        return decorated_function
    return decorator


# ============================================================================
# API Endpoints
# ============================================================================

@jobs_bp.route("/jobs", methods=["GET"])
@api_errors("Error fetching jobs")
def list_jobs():
    """
    List all jobs, most recent application first.

    Returns:
        JSON array of jobs
    """
    return jsonify(_get_service().list_jobs()), 200


@jobs_bp.route("/jobs", methods=["POST"])
@api_errors("Error creating job")
def create_job():
    """
    Create a job card.

    Request Body:
        company: Company name (required)
        role: Role title (required)
        dateApplied: YYYY-MM-DD or ISO datetime (default: today)
        status: One of the board statuses (default: "Applied")

    Returns:
        JSON with the created job (201)
    """
    job = _get_service().create_job(request.get_json(silent=True))
    return jsonify(job), 201


@jobs_bp.route("/jobs/statuses", methods=["GET"])
def get_statuses():
    """Return the board statuses in column order."""
    return jsonify({"statuses": STATUSES})


@jobs_bp.route("/jobs/<job_id>", methods=["GET"])
@api_errors("Error fetching job")
def get_job(job_id: str):
    """Get a single job by ID."""
    return jsonify(_get_service().get_job(job_id)), 200


@jobs_bp.route("/jobs/<job_id>", methods=["PUT"])
@api_errors("Error updating job")
def update_job(job_id: str):
    """
    Update a job's fields.

    Request Body:
        Any subset of company, role, dateApplied, status.
        Omitted fields keep their stored values.

    Returns:
        JSON with the updated job
    """
    job = _get_service().update_job(job_id, request.get_json(silent=True))
    return jsonify(job), 200


@jobs_bp.route("/jobs/<job_id>", methods=["DELETE"])
@api_errors("Error deleting job")
def delete_job(job_id: str):
    """Delete a job by ID."""
    _get_service().delete_job(job_id)
    return jsonify({"message": "Job deleted successfully"}), 200


app.register_blueprint(jobs_bp)


@app.route("/health", methods=["GET"])
def health_check():
    """
    Public health endpoint for external monitoring.

    Always answers 200; the body reports whether MongoDB is reachable.
    """
    try:
        mongo_status = "connected" if _get_repo().ping() else "disconnected"
    except Exception as e:
        logger.warning(f"Health check could not reach MongoDB: {e}")
        mongo_status = "disconnected"

    return jsonify({
        "status": "healthy" if mongo_status == "connected" else "degraded",
        "version": APP_VERSION,
        "services": {"mongodb": mongo_status},
    })


# ============================================================================
# Board page
# ============================================================================

@app.route("/")
def index():
    """Render the Kanban board."""
    try:
        jobs = [normalize_card(job) for job in _get_service().list_jobs()]
    except Exception:
        logger.exception("Error loading board")
        return render_template("board.html", columns={}, statuses=STATUSES, error="Could not load jobs"), 500

    return render_template("board.html", columns=group_by_status(jobs), statuses=STATUSES, error=None)


if __name__ == "__main__":
    logger.info(Config.summary())
    app.run(debug=False, port=5000)
