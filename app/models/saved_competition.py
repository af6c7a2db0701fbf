from sqlalchemy import UniqueConstraint
from app.extensions import db
from app.helpers.time import utcnow

class SavedCompetition(db.Model):
    """A member 'liking' a competition."""
    __tablename__ = "saved_competitions"

    id = db.Column(db.Integer, primary_key=True)

    profile_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    competition_id = db.Column(db.Integer, db.ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)

    notes = db.Column(db.Text, nullable=True)
    saved_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    profile = db.relationship("Profile", back_populates="saved_competitions")
    competition = db.relationship("Competition", back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("profile_id", "competition_id", name="uq_saved_profile_competition"),
    )
