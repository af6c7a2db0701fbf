from functools import wraps
from flask import session, jsonify
from typing import Optional

from app.extensions import db
from app.models import Profile
from app.helpers.email import normalize_email

def get_or_create_profile_for_email(email: str, nickname: Optional[str] = None) -> Profile:
    email = normalize_email(email)
    if not email:
        raise ValueError("email required")

    profile = Profile.query.filter_by(email=email).first()
    if profile:
        return profile

    profile = Profile(email=email, nickname=(nickname or "").strip() or email.split("@")[0])
    db.session.add(profile)
    db.session.commit()
    return profile

def get_profile_for_session() -> Optional[Profile]:
    """
    The identity provider puts the signed-in member's profile id in the
    session; anything else means nobody is signed in.
    """
    profile_id = session.get("profile_id")
    if not profile_id:
        return None
    return db.session.get(Profile, profile_id)

def profile_required(role: Optional[str] = None):
    """
    Decorator: resolve the signed-in profile and pass it to the view.
    401 if nobody is signed in, 403 if `role` is given and doesn't match.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            profile = get_profile_for_session()
            if not profile:
                return jsonify({"error": "Not signed in"}), 401
            if role and profile.role != role:
                return jsonify({"error": f"{role.capitalize()} account required"}), 403
            return view(profile, *args, **kwargs)
        return wrapped
    return decorator
