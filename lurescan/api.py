"""Main Flask API for LureScan.

Run: python -m lurescan.api
"""

import os
import logging
from flask import Flask, request, jsonify, abort
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from lurescan.app.heuristics import DEFAULT_CONFIG
from lurescan.app.scanner import scan_url, SUSPICIOUS_AT, HIGH_RISK_AT

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("api")

# Flask app
app = Flask(__name__)

RATE_LIMIT = os.getenv("LURESCAN_RATE_LIMIT", "60 per minute")

# Rate limiter: use shared storage (e.g. redis://) in production when REDIS_URL is set
REDIS_URL = os.getenv("REDIS_URL")
if REDIS_URL:
    limiter = Limiter(app=app, key_func=get_remote_address, default_limits=[RATE_LIMIT],
                      storage_uri=REDIS_URL)
    logger.info("Using %s for rate limiting", REDIS_URL)
else:
    limiter = Limiter(app=app, key_func=get_remote_address, default_limits=[RATE_LIMIT])

# API key
API_KEY = os.getenv("LURESCAN_API_KEY", None)
if API_KEY:
    logger.info("API key enabled")


def require_api_key() -> None:
    if not API_KEY:
        return
    key = request.headers.get("X-API-Key") or request.args.get("api_key")
    if not key or key != API_KEY:
        abort(401, description="Invalid or missing API key")


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "version": "1.0"})


@app.route("/scan", methods=["POST"])
@limiter.limit("30 per minute")
def scan():
    require_api_key()
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("url"), str):
        return jsonify({"error": "missing 'url' in JSON body"}), 400

    url = data["url"].strip()
    if not url:
        return jsonify({"error": "empty url"}), 400

    payload = scan_url(url)
    logger.info("Scanned %s -> %s (%d)", url, payload["verdict"], payload["score"])
    return jsonify(payload), 200


@app.route("/config/rules", methods=["GET"])
def config_rules():
    """Active heuristic configuration, read-only."""
    cfg = DEFAULT_CONFIG.to_dict()
    cfg["thresholds"] = {"suspicious": SUSPICIOUS_AT, "high_risk": HIGH_RISK_AT}
    return jsonify(cfg), 200


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 5050)), debug=False)
