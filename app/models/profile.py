from app.extensions import db
from app.helpers.time import utcnow

class Profile(db.Model):
    __tablename__ = "profiles"

    id = db.Column(db.Integer, primary_key=True)

    # Basic information, set at signup
    nickname = db.Column(db.String(80), nullable=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)

    # "member", "client" or "admin"
    role = db.Column(db.String(20), nullable=False, default="member")

    # General profile
    first_name = db.Column(db.String(120), nullable=True)
    last_name = db.Column(db.String(120), nullable=True)
    gender = db.Column(db.String(40), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    postcode = db.Column(db.String(20), nullable=True)

    # Demographic & lifestyle (list columns hold lists of strings)
    interests = db.Column(db.JSON, nullable=True)
    hobbies = db.Column(db.JSON, nullable=True)
    occupation = db.Column(db.String(120), nullable=True)
    marital_status = db.Column(db.String(40), nullable=True)
    income_range = db.Column(db.String(40), nullable=True)
    education = db.Column(db.String(120), nullable=True)
    ethnicity = db.Column(db.String(120), nullable=True)
    languages_spoken = db.Column(db.JSON, nullable=True)
    home_ownership = db.Column(db.String(40), nullable=True)
    vehicle_ownership = db.Column(db.String(40), nullable=True)
    pet_ownership = db.Column(db.String(40), nullable=True)

    # Identity document review: 'pending','approved','rejected' (None = never submitted)
    verification_status = db.Column(db.String(20), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True, default=utcnow, onupdate=utcnow)

    saved_competitions = db.relationship("SavedCompetition", back_populates="profile", lazy=True)
    submissions = db.relationship("CompetitionSubmission", back_populates="profile", lazy=True)
    client_submissions = db.relationship("ClientSubmission", back_populates="client", lazy=True)
