from flask import Blueprint, request, jsonify, abort

from app.extensions import db
from app.models import Competition
from app.helpers.competition import get_listed_competitions, comp_is_finished, PUBLIC_STATUSES

competitions_bp = Blueprint("competitions", __name__)

@competitions_bp.route("/api/competitions")
def competitions_index():
    """
    Public listing of competitions.

    Query params (both optional):
      ?status=completed   -> only that status (default: active/open/published/live;
                         drafts and cancelled comps are never public)
      ?category=Photography
    """
    status = (request.args.get("status") or "").strip() or None
    category = (request.args.get("category") or "").strip() or None

    if status and status not in PUBLIC_STATUSES:
        return jsonify({"error": f"status must be one of: {', '.join(PUBLIC_STATUSES)}"}), 400

    comps = get_listed_competitions(status=status, category=category)
    return jsonify({"competitions": [c.to_dict() for c in comps]})


@competitions_bp.route("/api/competitions/<int:competition_id>")
def competition_detail(competition_id):
    comp = db.session.get(Competition, competition_id)
    if not comp or comp.status not in PUBLIC_STATUSES:
        abort(404)

    data = comp.to_dict()
    data["is_finished"] = comp_is_finished(comp)
    return jsonify(data)
