from datetime import date

from flask import Blueprint, current_app, jsonify, request

from jobboard.auth import authenticate, issue_token, session_for_token
from jobboard.errors import AuthError, PolicyError, ServiceError
from jobboard.listing import is_open
from jobboard.store import service_store

bp = Blueprint("api", __name__, url_prefix="/api")

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@bp.errorhandler(ServiceError)
def service_error(error):
    return jsonify({"error": error.message}), error.status_code


def _method_not_allowed(allowed):
    response = jsonify({"error": f"Method {request.method} not allowed"})
    response.status_code = 405
    response.headers["Allow"] = ", ".join(allowed)
    return response


def _json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ServiceError("Invalid request body", 400)
    return payload


def _admin_from_bearer():
    """Resolve the bearer token to a session and insist on the admin role."""
    credentials = request.authorization
    if credentials is None or credentials.type != "bearer" or not credentials.token:
        raise AuthError("Not authorized")
    caller = session_for_token(credentials.token)
    if not caller.is_admin:
        current_app.logger.warning("Non-admin user %s tried to delete a job", caller.user_id)
        raise PolicyError("Access denied")
    return caller


def _delete_job(job_id):
    caller = _admin_from_bearer()
    # Elevated store: the caller was checked above
    service_store().table("jobs").delete(job_id)
    current_app.logger.info("Admin %s deleted job %s", caller.user_id, job_id)
    return jsonify({"success": True})


# ================= TOKENS =================
@bp.route("/auth/token", methods=["POST"])
def token():
    payload = _json_body()
    email = payload.get("email")
    password = payload.get("password")
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise ServiceError("email and password are required", 400)

    user = authenticate(email, password)
    return jsonify({
        "access_token": issue_token(user),
        "token_type": "bearer",
        "expires_in": current_app.config["ACCESS_TOKEN_MAX_AGE"],
    })


# ================= DELETE JOB =================
@bp.route("/delete-job", methods=ALL_METHODS)
def delete_job():
    if request.method != "POST":
        return _method_not_allowed(["POST"])

    payload = _json_body()
    job_id = payload.get("jobId")
    if job_id in (None, ""):
        raise ServiceError("jobId is required", 400)
    try:
        job_id = int(job_id)
    except (TypeError, ValueError):
        raise ServiceError("jobId must be an integer", 400) from None

    return _delete_job(job_id)


@bp.route("/jobs/<int:job_id>", methods=ALL_METHODS)
def job(job_id):
    if request.method == "DELETE":
        return _delete_job(job_id)
    if request.method != "GET":
        return _method_not_allowed(["GET", "DELETE"])

    posting = service_store().table("jobs").get(id=job_id, status="active")
    if posting is None or not is_open(posting, date.today()):
        raise ServiceError("Job not found", 404)
    return jsonify(posting.to_dict())
