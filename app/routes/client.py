from flask import Blueprint, request, jsonify

from app.extensions import db
from app.models import ClientSubmission
from app.helpers.account import profile_required
from app.helpers.submission import (
    parse_competition_fields,
    missing_fields,
    check_dates,
    current_fields,
    CLIENT_FIELDS,
    REVIEW_REQUIRED_FIELDS,
)
from app.helpers.time import utcnow

client_bp = Blueprint("client", __name__)

# A client picks one of these when saving; the rest are set by admins
CLIENT_STATUSES = ("draft", "submitted")

# Once an admin has picked it up, the client can't change it any more
EDITABLE_STATUSES = ("draft", "rejected")


def _get_own_submission(profile, submission_id):
    return ClientSubmission.query.filter_by(id=submission_id, client_id=profile.id).first()


def _apply(submission, data, creating=False):
    """
    Validate `data` and write it onto `submission`.
    Returns an error response tuple, or None on success.
    """
    data = dict(data)
    status = str(data.pop("status", None) or "draft").strip().lower()
    if status not in CLIENT_STATUSES:
        return jsonify({"error": f"status must be one of: {', '.join(CLIENT_STATUSES)}"}), 400

    try:
        cleaned = parse_competition_fields(data, CLIENT_FIELDS)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    merged = {} if creating else current_fields(submission, CLIENT_FIELDS)
    merged.update(cleaned)

    if not merged.get("title"):
        return jsonify({"error": "title is required"}), 400

    if status == "submitted":
        missing = missing_fields(merged, REVIEW_REQUIRED_FIELDS)
        if missing:
            return jsonify({"error": f"Please fill in the following required fields: {', '.join(missing)}"}), 400

    date_error = check_dates(merged)
    if date_error:
        return jsonify({"error": date_error}), 400

    for k, v in cleaned.items():
        setattr(submission, k, v)

    submission.status = status
    if status == "submitted":
        submission.submitted_at = utcnow()
        submission.rejection_reason = None

    return None


@client_bp.route("/api/client/submissions")
@profile_required("client")
def client_submissions(profile):
    rows = (
        ClientSubmission.query
        .filter_by(client_id=profile.id)
        .order_by(ClientSubmission.created_at.desc(), ClientSubmission.id.desc())
        .all()
    )
    return jsonify({"submissions": [s.to_dict() for s in rows]})


@client_bp.route("/api/client/submissions", methods=["POST"])
@profile_required("client")
def client_create_submission(profile):
    """
    Save a competition proposal.

    Payload: competition fields plus "status": "draft" (default) or
    "submitted" to send it for review. Submitting requires every
    review field and sensible dates; drafts only need a title.
    """
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    submission = ClientSubmission(client_id=profile.id)
    error = _apply(submission, data, creating=True)
    if error:
        return error

    db.session.add(submission)
    db.session.commit()
    return jsonify(submission.to_dict()), 201


@client_bp.route("/api/client/submissions/<int:submission_id>", methods=["PATCH"])
@profile_required("client")
def client_update_submission(profile, submission_id):
    submission = _get_own_submission(profile, submission_id)
    if not submission:
        return jsonify({"error": "Submission not found"}), 404

    if submission.status not in EDITABLE_STATUSES:
        return jsonify({"error": f"Submission is {submission.status} and can no longer be edited"}), 409

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    error = _apply(submission, data)
    if error:
        db.session.rollback()
        return error

    db.session.commit()
    return jsonify(submission.to_dict())


@client_bp.route("/api/client/submissions/<int:submission_id>", methods=["DELETE"])
@profile_required("client")
def client_delete_submission(profile, submission_id):
    submission = _get_own_submission(profile, submission_id)
    if not submission:
        return jsonify({"error": "Submission not found"}), 404

    if submission.status not in EDITABLE_STATUSES:
        return jsonify({"error": f"Submission is {submission.status} and can no longer be deleted"}), 409

    db.session.delete(submission)
    db.session.commit()
    return jsonify({"deleted": True})
