import hmac
from functools import wraps
from flask import session, current_app, jsonify

from app.helpers.email import normalize_email, is_admin_email

def admin_login_configured() -> bool:
    return bool(current_app.config.get("ADMIN_PASSWORD")) and bool(current_app.config.get("ADMIN_EMAILS"))

def admin_credentials_ok(email: str, password: str) -> bool:
    """Email must be listed in ADMIN_EMAILS and password must match ADMIN_PASSWORD."""
    expected = current_app.config.get("ADMIN_PASSWORD") or ""
    if not expected or not is_admin_email(email):
        return False
    return hmac.compare_digest((password or "").encode("utf-8"), expected.encode("utf-8"))

def establish_admin_session(email: str) -> None:
    # Always reset first (prevents stale perms)
    session.pop("admin_ok", None)
    session.pop("admin_email", None)

    session["admin_ok"] = True
    session["admin_email"] = normalize_email(email)

def clear_admin_session() -> None:
    session.pop("admin_ok", None)
    session.pop("admin_email", None)

def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not session.get("admin_ok"):
            return jsonify({"error": "Admin login required"}), 403
        return view(*args, **kwargs)
    return wrapped
