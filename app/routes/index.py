from flask import Blueprint, jsonify

index_bp = Blueprint("index", __name__)

@index_bp.route("/")
def index():
    """Landing/health check."""
    return jsonify({"status": "ok"})
