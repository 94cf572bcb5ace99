import os
import sys
import time

# Ensure backend/ is on sys.path so sibling imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask, g, jsonify, request
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from config import env_float, get_data_path
from credentials import CredentialTable
from data_loader import load_catalog
from errors import RoadmapError
from roadmap_pipeline import generate_roadmap

load_dotenv()

app = Flask(__name__)

VERSION = "1.0.0"
DATA_PATH = get_data_path()
_SLOW_REQUEST_LOG_MS = env_float("SLOW_REQUEST_LOG_MS", 750.0, minimum=0.0)
_MAX_SKILLS = 10
_MAX_FIELD_LEN = 200

# ── Startup data load ──────────────────────────────────────────────────────────
try:
    _catalog = load_catalog(DATA_PATH)
    _credentials = CredentialTable.from_csv(os.path.join(DATA_PATH, "credential_requirements.csv"))
    print(f"[OK] Loaded {len(_catalog)} courses from {DATA_PATH}")
except FileNotFoundError:
    print(f"[FATAL] Data file not found: {DATA_PATH}", file=sys.stderr)
    sys.exit(1)
except Exception as exc:
    print(f"[FATAL] Failed to load data: {exc}", file=sys.stderr)
    sys.exit(1)

# Swapped out in tests; None means the live OpenAI call.
plan_generator = None


def _error_response(error_code: str, message: str, status: int):
    return jsonify({
        "mode": "error",
        "error": {"error_code": error_code, "message": message},
    }), status


# -- Security headers ------------------------------------------------------
@app.before_request
def _start_request_timer():
    g._request_start_time = time.perf_counter()


@app.after_request
def _add_security_headers(response):
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "same-origin"

    started = getattr(g, "_request_start_time", None)
    if started is not None:
        duration_ms = (time.perf_counter() - started) * 1000.0
        if duration_ms >= _SLOW_REQUEST_LOG_MS:
            endpoint = request.endpoint or "unknown"
            print(
                f"[SLOW] {request.method} {request.path} "
                f"endpoint={endpoint} status={response.status_code} duration_ms={duration_ms:.1f}"
            )
    return response


# -- Health endpoint --------------------------------------------------------
@app.route("/health", methods=["GET"])
def health_endpoint():
    return jsonify({
        "status": "ok",
        "version": VERSION,
        "courses_loaded": len(_catalog),
    })


# -- Input validation ------------------------------------------------------
def _validate_roadmap_body(body):
    """Returns (error_code, message) on invalid input, (None, None) on success."""
    if not isinstance(body, dict):
        return "INVALID_INPUT", "Request body must be valid JSON."
    for field in ("institution", "program", "credential"):
        val = body.get(field)
        if not isinstance(val, str) or not val.strip():
            return "INVALID_INPUT", f"'{field}' is required."
        if len(val) > _MAX_FIELD_LEN:
            return "INVALID_INPUT", f"'{field}' must be at most {_MAX_FIELD_LEN} characters."
    skills = body.get("prioritized_skills")
    if skills is not None:
        if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
            return "INVALID_INPUT", "'prioritized_skills' must be a list of strings."
        if len(skills) > _MAX_SKILLS:
            return "INVALID_INPUT", f"'prioritized_skills' accepts at most {_MAX_SKILLS} entries."
    return None, None


# ── Error handlers ─────────────────────────────────────────────────────────────
@app.errorhandler(RoadmapError)
def handle_roadmap_error(e):
    print(f"[WARN] Roadmap request failed: {e.error_code}: {e.message}", file=sys.stderr)
    return _error_response(e.error_code, e.message, e.http_status)


@app.errorhandler(HTTPException)
def handle_http_error(e):
    # 404, 405 and other routing errors keep their own status.
    return _error_response(e.name.upper().replace(" ", "_"), e.description, e.code)


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    print(f"[ERROR] Unhandled exception: {e!r}", file=sys.stderr)
    return _error_response("SERVER_ERROR", "An unexpected server error occurred.", 500)


# ── Routes ─────────────────────────────────────────────────────────────────────
@app.route("/institutions", methods=["GET"])
def get_institutions():
    return jsonify({"institutions": _catalog.list_institutions()})


@app.route("/roadmap", methods=["POST"])
def roadmap():
    body = request.get_json(force=True, silent=True)
    err_code, err_msg = _validate_roadmap_body(body)
    if err_code:
        return _error_response(err_code, err_msg, 400)

    result = generate_roadmap(
        _catalog,
        _credentials,
        body["institution"].strip(),
        body["program"].strip(),
        body["credential"].strip(),
        prioritized_skills=body.get("prioritized_skills"),
        generate=plan_generator,
    )
    report = result["report"]
    return jsonify({
        "mode": "roadmap",
        "plan": result["plan"],
        "prefixes": result["prefixes"],
        "diagnostics": {
            "credit_status": report["credit_status"],
            "credit_ratio": report["credit_ratio"],
            "placeholder_ratio": report["placeholder_ratio"],
            "discarded": [d["original_name"] for d in report["discarded"]],
            "warnings": report["warnings"],
        },
    })


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(debug=False, host="0.0.0.0", port=port)
