from sqlalchemy import UniqueConstraint
from app.extensions import db
from app.helpers.time import utcnow

class CompetitionSubmission(db.Model):
    """A member's entry into a competition (created when they join)."""
    __tablename__ = "competition_submissions"

    id = db.Column(db.Integer, primary_key=True)

    profile_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    competition_id = db.Column(db.Integer, db.ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)

    submission_title = db.Column(db.String(200), nullable=False)
    submission_description = db.Column(db.Text, nullable=True)
    team_name = db.Column(db.String(120), nullable=True)

    status = db.Column(db.String(20), nullable=False, default="draft")  # 'draft','submitted','under_review'

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    profile = db.relationship("Profile", back_populates="submissions")
    competition = db.relationship("Competition", back_populates="submissions")

    __table_args__ = (
        UniqueConstraint("profile_id", "competition_id", name="uq_submission_profile_competition"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "competition_id": self.competition_id,
            "submission_title": self.submission_title,
            "submission_description": self.submission_description,
            "team_name": self.team_name,
            "status": self.status,
        }
