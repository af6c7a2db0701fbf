import sys
from flask import Blueprint, request, jsonify

from app.helpers.email import send_contact_message_via_email

contact_bp = Blueprint("contact", __name__)

REQUIRED_FIELDS = ("firstName", "lastName", "email", "subject", "message")


@contact_bp.route("/api/contact", methods=["POST"])
def contact_submit():
    data = request.get_json(force=True, silent=True) or {}
    values = {k: str(data.get(k) or "").strip() for k in REQUIRED_FIELDS}

    if not all(values.values()):
        return jsonify({"error": "All fields are required"}), 400

    try:
        send_contact_message_via_email(
            values["firstName"],
            values["lastName"],
            values["email"],
            values["subject"],
            values["message"],
        )
    except Exception as e:
        print(f"[CONTACT] Failed to forward contact message: {e}", file=sys.stderr)
        return jsonify({"error": "Failed to send message"}), 500

    return jsonify({"message": "Message sent successfully"})
