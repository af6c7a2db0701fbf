from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError
from datetime import date

from app.extensions import db
from app.models import Competition, SavedCompetition, CompetitionSubmission
from app.helpers.account import profile_required
from app.helpers.competition import comp_is_finished, LISTED_STATUSES
from app.helpers.time import utcnow
from app.helpers.profile_levels import (
    profile_level_payload,
    GENERAL_FIELDS,
    DEMOGRAPHIC_FIELDS,
)

member_bp = Blueprint("member", __name__)

# verification_status, email and role are set elsewhere (admin / identity provider)
EDITABLE_FIELDS = ("nickname",) + GENERAL_FIELDS + DEMOGRAPHIC_FIELDS
LIST_FIELDS = ("interests", "hobbies", "languages_spoken")


member_required = profile_required()


def _clean_value(field, value):
    """
    Normalise one incoming profile value.
    Raises ValueError for values the column can't hold.
    """
    if value is None:
        return None

    if field in LIST_FIELDS:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise ValueError(f"{field} must be a list")
        return [str(v).strip() for v in value if v is not None and str(v).strip()]

    if field == "date_of_birth":
        raw = str(value).strip()
        if not raw:
            return None
        return date.fromisoformat(raw)

    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value.strip()


@member_bp.route("/api/member/profile-level")
@member_required
def member_profile_level(profile):
    return jsonify(profile_level_payload(profile))


@member_bp.route("/api/member/dashboard")
@member_required
def member_dashboard(profile):
    """
    Quick stats for the member dashboard header:
    liked / joined / completed counts plus the profile rank.
    """
    liked = SavedCompetition.query.filter_by(profile_id=profile.id).count()
    submissions = CompetitionSubmission.query.filter_by(profile_id=profile.id).all()

    return jsonify({
        "display_name": profile.nickname or profile.email,
        "liked": liked,
        "joined": len(submissions),
        "completed": sum(1 for s in submissions if s.status == "submitted"),
        "profile_level": profile_level_payload(profile),
    })


@member_bp.route("/api/member/profile", methods=["PATCH"])
@member_required
def member_update_profile(profile):
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    unknown = sorted(k for k in data if k not in EDITABLE_FIELDS)
    if unknown:
        return jsonify({"error": f"Fields not editable: {', '.join(unknown)}"}), 400

    try:
        cleaned = {k: _clean_value(k, v) for k, v in data.items()}
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    for k, v in cleaned.items():
        setattr(profile, k, v)
    db.session.commit()

    return jsonify(profile_level_payload(profile))


@member_bp.route("/api/member/saved/<int:competition_id>", methods=["POST"])
@member_required
def member_like_competition(profile, competition_id):
    comp = db.session.get(Competition, competition_id)
    if not comp:
        return jsonify({"error": "Competition not found"}), 404

    existing = SavedCompetition.query.filter_by(profile_id=profile.id, competition_id=comp.id).first()
    if existing:
        return jsonify({"saved": True}), 200

    db.session.add(SavedCompetition(profile_id=profile.id, competition_id=comp.id))
    try:
        db.session.commit()
    except IntegrityError:
        # Another request saved it first
        db.session.rollback()
        return jsonify({"saved": True}), 200
    return jsonify({"saved": True}), 201


@member_bp.route("/api/member/saved/<int:competition_id>", methods=["DELETE"])
@member_required
def member_unlike_competition(profile, competition_id):
    SavedCompetition.query.filter_by(profile_id=profile.id, competition_id=competition_id).delete()
    db.session.commit()
    return jsonify({"saved": False})


@member_bp.route("/api/member/competitions/<int:competition_id>/join", methods=["POST"])
@member_required
def member_join_competition(profile, competition_id):
    """
    Enter a competition. Creates a draft entry the member fills in later.

    Optional payload: {"submission_title": "...", "team_name": "..."}
    """
    comp = db.session.get(Competition, competition_id)
    if not comp or comp.status not in LISTED_STATUSES:
        return jsonify({"error": "Competition not found"}), 404

    if comp_is_finished(comp):
        return jsonify({"error": "That competition has finished, entries are closed"}), 409

    data = request.get_json(force=True, silent=True) or {}
    title = str(data.get("submission_title") or "").strip() or comp.title
    team_name = str(data.get("team_name") or "").strip() or None

    existing = CompetitionSubmission.query.filter_by(profile_id=profile.id, competition_id=comp.id).first()
    if existing:
        return jsonify({"error": "Already joined", "submission": existing.to_dict()}), 409

    entry = CompetitionSubmission(
        profile_id=profile.id,
        competition_id=comp.id,
        submission_title=title,
        team_name=team_name,
        status="draft",
    )
    db.session.add(entry)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": "Already joined"}), 409

    return jsonify(entry.to_dict()), 201


@member_bp.route("/api/member/submissions/<int:submission_id>/submit", methods=["POST"])
@member_required
def member_submit_entry(profile, submission_id):
    """Hand in a joined entry. Counts as 'completed' on the dashboard."""
    entry = CompetitionSubmission.query.filter_by(id=submission_id, profile_id=profile.id).first()
    if not entry:
        return jsonify({"error": "Entry not found"}), 404

    if comp_is_finished(entry.competition):
        return jsonify({"error": "That competition has finished, entries are closed"}), 409

    data = request.get_json(force=True, silent=True) or {}
    description = str(data.get("submission_description") or "").strip()
    if description:
        entry.submission_description = description

    entry.status = "submitted"
    entry.submitted_at = utcnow()
    db.session.commit()

    return jsonify(entry.to_dict())
