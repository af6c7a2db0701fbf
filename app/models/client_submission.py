from app.extensions import db
from app.helpers.time import utcnow

class ClientSubmission(db.Model):
    """A competition proposed by a business client, waiting on admin review."""
    __tablename__ = "client_submissions"

    id = db.Column(db.Integer, primary_key=True)

    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    # Drafts may be incomplete; everything is checked when submitted for review
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(80), nullable=True)

    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    submission_deadline = db.Column(db.Date, nullable=True)

    prize_amount = db.Column(db.Numeric(12, 2), nullable=True)
    prize_currency = db.Column(db.String(8), nullable=True)

    organizer_name = db.Column(db.String(160), nullable=True)
    organizer_email = db.Column(db.String(255), nullable=True)
    company_name = db.Column(db.String(160), nullable=True)

    # 'draft','submitted','under_review','approved','rejected','published'
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)

    admin_notes = db.Column(db.Text, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)

    # Set once the submission is published as a live competition
    competition_id = db.Column(db.Integer, db.ForeignKey("competitions.id", ondelete="SET NULL"), nullable=True)

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=True)
    reviewed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    approved_at = db.Column(db.DateTime(timezone=True), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True, default=utcnow, onupdate=utcnow)

    client = db.relationship("Profile", back_populates="client_submissions")
    competition = db.relationship("Competition")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "client_id": self.client_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "submission_deadline": self.submission_deadline.isoformat() if self.submission_deadline else None,
            "prize_amount": float(self.prize_amount) if self.prize_amount is not None else None,
            "prize_currency": self.prize_currency,
            "organizer_name": self.organizer_name,
            "organizer_email": self.organizer_email,
            "company_name": self.company_name,
            "status": self.status,
            "admin_notes": self.admin_notes,
            "rejection_reason": self.rejection_reason,
            "competition_id": self.competition_id,
        }
