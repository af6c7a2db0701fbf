from datetime import date

import pytest

from app import create_app
from app.config import Config
from app.extensions import db
from app.models import Profile, Competition
from app.routes import register_blueprints


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    ADMIN_PASSWORD = "test-admin-password"
    ADMIN_EMAILS = "admin@example.com, Second@Example.com"
    RESEND_API_KEY = None
    RESEND_FROM_EMAIL = "noreply@example.com"
    CONTACT_TO_EMAIL = "inbox@example.com"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    register_blueprints(app)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


GENERAL = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "gender": "Female",
    "date_of_birth": date(1990, 12, 10),
    "postcode": "3000",
}

DEMOGRAPHIC = {
    "interests": ["Photography"],
    "hobbies": ["Hiking", "Chess"],
    "occupation": "Engineer",
    "marital_status": "Single",
    "income_range": "75k-100k",
    "education": "Masters",
    "ethnicity": "Prefer not to say",
    "languages_spoken": ["English"],
    "home_ownership": "Owner",
    "vehicle_ownership": "Car",
    "pet_ownership": "Cat",
}


@pytest.fixture
def make_profile(app):
    def _make(email="member@example.com", nickname="member", **fields):
        p = Profile(email=email, nickname=nickname, **fields)
        db.session.add(p)
        db.session.commit()
        return p
    return _make


@pytest.fixture
def make_competition(app):
    def _make(title="Photo Challenge", status="active", start_date=date(2000, 1, 1), end_date=date(2999, 1, 1), **fields):
        c = Competition(
            title=title,
            category=fields.pop("category", "Photography"),
            status=status,
            start_date=start_date,
            end_date=end_date,
            **fields,
        )
        db.session.add(c)
        db.session.commit()
        return c
    return _make


@pytest.fixture
def login_member(client):
    def _login(profile):
        with client.session_transaction() as sess:
            sess["profile_id"] = profile.id
    return _login


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "test-admin-password"})
    assert resp.status_code == 200
    return client


def fresh(model, pk):
    """Re-read a row from the database, skipping the session's identity map."""
    db.session.expire_all()
    return db.session.get(model, pk)
