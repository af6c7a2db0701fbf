import sys
from flask import Blueprint, request, jsonify, abort

from app.extensions import db
from app.models import Profile, Competition, ClientSubmission
from app.helpers.admin import (
    admin_login_configured,
    admin_credentials_ok,
    establish_admin_session,
    clear_admin_session,
    admin_required,
)
from app.helpers.competition import (
    get_expired_competitions,
    complete_expired_competitions,
    manually_complete_competition,
)
from app.helpers.email import send_verification_result_via_email
from app.helpers.profile_levels import calculate_profile_level
from app.helpers.submission import (
    parse_competition_fields,
    missing_fields,
    check_dates,
    current_fields,
    publish_submission,
    COMPETITION_FIELDS,
    COMPETITION_REQUIRED_FIELDS,
    REVIEW_REQUIRED_FIELDS,
)
from app.helpers.time import utcnow

admin_bp = Blueprint("admin", __name__)

VERIFICATION_STATUSES = ("pending", "approved", "rejected")

# Review outcomes an admin can give a client submission
REVIEW_STATUSES = ("under_review", "approved", "rejected", "published")


@admin_bp.route("/api/admin/login", methods=["POST"])
def admin_login():
    data = request.get_json(force=True, silent=True) or {}
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""

    if not admin_login_configured():
        print("[ADMIN] Login attempted but ADMIN_PASSWORD/ADMIN_EMAILS are not configured", file=sys.stderr)
        return jsonify({"valid": False, "error": "Admin credentials not configured"}), 400

    if not admin_credentials_ok(email, password):
        print(f"[ADMIN] Rejected login for {email!r}", file=sys.stderr)
        return jsonify({"valid": False, "error": "Invalid credentials"}), 401

    establish_admin_session(email)
    return jsonify({"valid": True})


@admin_bp.route("/api/admin/logout", methods=["POST"])
def admin_logout():
    clear_admin_session()
    return jsonify({"ok": True})


@admin_bp.route("/api/admin/competitions/expired")
@admin_required
def admin_expired_competitions():
    comps = get_expired_competitions()
    return jsonify({"competitions": [c.to_dict() for c in comps]})


@admin_bp.route("/api/admin/competitions/complete-expired", methods=["POST"])
@admin_required
def admin_complete_expired():
    updated = complete_expired_competitions()
    return jsonify({
        "success": True,
        "message": f"Successfully updated {len(updated)} competitions to completed status",
        "updatedCompetitions": updated,
    })


@admin_bp.route("/api/admin/competitions/<int:competition_id>/complete", methods=["POST"])
@admin_required
def admin_complete_competition(competition_id):
    comp = manually_complete_competition(competition_id)
    if not comp:
        abort(404)
    return jsonify({"success": True, "data": {"id": comp.id, "title": comp.title, "status": comp.status}})


@admin_bp.route("/api/admin/profiles/<int:profile_id>/verification", methods=["POST"])
@admin_required
def admin_set_verification(profile_id):
    """
    Record the outcome of an identity document review.

    Payload: {"status": "approved"}  (or "pending" / "rejected")
    """
    profile = db.session.get(Profile, profile_id)
    if not profile:
        abort(404)

    data = request.get_json(force=True, silent=True) or {}
    status = (data.get("status") or "").strip().lower()
    if status not in VERIFICATION_STATUSES:
        return jsonify({"error": f"status must be one of: {', '.join(VERIFICATION_STATUSES)}"}), 400

    previous = profile.verification_status
    profile.verification_status = status
    db.session.commit()

    print(f"[ADMIN] Verification for profile {profile.id}: {previous} -> {status}", file=sys.stderr)

    result = calculate_profile_level(profile)

    if status != previous and status in ("approved", "rejected"):
        send_verification_result_via_email(profile.email, status, result)

    return jsonify({
        "id": profile.id,
        "verification_status": profile.verification_status,
        "level": result.level,
    })


# --- Competitions ---

@admin_bp.route("/api/admin/competitions")
@admin_required
def admin_competitions():
    """Every competition, any status (drafts and cancelled included)."""
    q = Competition.query
    status = (request.args.get("status") or "").strip()
    if status:
        q = q.filter(Competition.status == status)

    comps = q.order_by(Competition.created_at.desc(), Competition.id.desc()).all()
    return jsonify({"competitions": [c.to_dict() for c in comps]})


@admin_bp.route("/api/admin/competitions", methods=["POST"])
@admin_required
def admin_create_competition():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        fields = parse_competition_fields(data, COMPETITION_FIELDS)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    missing = missing_fields(fields, COMPETITION_REQUIRED_FIELDS)
    if missing:
        return jsonify({"error": f"Missing required fields: {', '.join(missing)}"}), 400

    date_error = check_dates(fields)
    if date_error:
        return jsonify({"error": date_error}), 400

    if not fields.get("status"):
        fields["status"] = "draft"
    if fields.get("prize_amount") is not None and not fields.get("prize_currency"):
        fields["prize_currency"] = "USD"
    fields["featured"] = bool(fields.get("featured"))

    comp = Competition(**fields)
    db.session.add(comp)
    db.session.commit()

    print(f"[ADMIN] Created competition {comp.id} ({comp.title})", file=sys.stderr)
    return jsonify(comp.to_dict()), 201


@admin_bp.route("/api/admin/competitions/<int:competition_id>", methods=["PATCH"])
@admin_required
def admin_update_competition(competition_id):
    comp = db.session.get(Competition, competition_id)
    if not comp:
        abort(404)

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        fields = parse_competition_fields(data, COMPETITION_FIELDS)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    merged = current_fields(comp, COMPETITION_FIELDS)
    merged.update(fields)

    missing = missing_fields(merged, COMPETITION_REQUIRED_FIELDS + ("status",))
    if missing:
        return jsonify({"error": f"Missing required fields: {', '.join(missing)}"}), 400

    date_error = check_dates(merged)
    if date_error:
        return jsonify({"error": date_error}), 400

    for k, v in fields.items():
        setattr(comp, k, bool(v) if k == "featured" else v)
    comp.updated_at = utcnow()
    db.session.commit()

    return jsonify(comp.to_dict())


@admin_bp.route("/api/admin/competitions/<int:competition_id>/archive", methods=["POST"])
@admin_required
def admin_archive_competition(competition_id):
    """Soft delete: cancelled comps drop off the public listing."""
    comp = db.session.get(Competition, competition_id)
    if not comp:
        abort(404)

    comp.status = "cancelled"
    comp.updated_at = utcnow()
    db.session.commit()
    return jsonify(comp.to_dict())


@admin_bp.route("/api/admin/competitions/<int:competition_id>", methods=["DELETE"])
@admin_required
def admin_delete_competition(competition_id):
    comp = db.session.get(Competition, competition_id)
    if not comp:
        abort(404)

    # Keep the client's submission, just unlink it
    ClientSubmission.query.filter_by(competition_id=comp.id).update({"competition_id": None})

    db.session.delete(comp)
    db.session.commit()

    print(f"[ADMIN] Deleted competition {competition_id}", file=sys.stderr)
    return jsonify({"deleted": True})


# --- Client submissions ---

@admin_bp.route("/api/admin/submissions")
@admin_required
def admin_submissions():
    """
    Client submissions waiting on (or past) review.
    Drafts are the client's business and aren't listed unless asked for.
    """
    q = ClientSubmission.query
    status = (request.args.get("status") or "").strip()
    if status:
        q = q.filter(ClientSubmission.status == status)
    else:
        q = q.filter(ClientSubmission.status != "draft")

    rows = q.order_by(ClientSubmission.submitted_at.desc(), ClientSubmission.id.desc()).all()
    return jsonify({"submissions": [s.to_dict() for s in rows]})


@admin_bp.route("/api/admin/submissions/<int:submission_id>/review", methods=["POST"])
@admin_required
def admin_review_submission(submission_id):
    """
    Move a client submission through review.

    Payload:
      {
        "status": "under_review" | "approved" | "rejected" | "published",
        "admin_notes": "...",          (optional)
        "rejection_reason": "..."      (optional, kept on reject)
      }

    Publishing creates the live ('active') competition.
    """
    submission = db.session.get(ClientSubmission, submission_id)
    if not submission:
        abort(404)

    data = request.get_json(force=True, silent=True) or {}
    status = str(data.get("status") or "").strip().lower()
    if status not in REVIEW_STATUSES:
        return jsonify({"error": f"status must be one of: {', '.join(REVIEW_STATUSES)}"}), 400

    if submission.status in ("draft", "published") or submission.competition_id:
        return jsonify({"error": f"Submission is {submission.status} and can't be reviewed"}), 409

    if status == "published":
        missing = missing_fields(current_fields(submission, REVIEW_REQUIRED_FIELDS), REVIEW_REQUIRED_FIELDS)
        if missing:
            return jsonify({"error": f"Submission is missing: {', '.join(missing)}"}), 409

    now = utcnow()
    submission.status = status
    submission.reviewed_at = now

    notes = str(data.get("admin_notes") or "").strip()
    if notes:
        submission.admin_notes = notes

    if status == "rejected":
        submission.rejection_reason = str(data.get("rejection_reason") or "").strip() or None

    if status == "approved":
        submission.approved_at = now

    comp = None
    if status == "published":
        if not submission.approved_at:
            submission.approved_at = now
        comp = publish_submission(submission)

    db.session.commit()

    print(f"[ADMIN] Submission {submission.id} -> {status}", file=sys.stderr)

    payload = submission.to_dict()
    if comp:
        payload["competition"] = comp.to_dict()
    return jsonify(payload)


@admin_bp.route("/api/admin/submissions/<int:submission_id>", methods=["DELETE"])
@admin_required
def admin_delete_submission(submission_id):
    submission = db.session.get(ClientSubmission, submission_id)
    if not submission:
        abort(404)

    db.session.delete(submission)
    db.session.commit()
    return jsonify({"deleted": True})
