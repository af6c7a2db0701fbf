from app.extensions import db
from app.helpers.time import utcnow

class Competition(db.Model):
    __tablename__ = "competitions"

    id = db.Column(db.Integer, primary_key=True)

    # Public-facing title, e.g. "Summer Photo Challenge"
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(80), nullable=False)

    # 'draft','published','active','open','live','completed','cancelled'
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)

    # Calendar dates (no time component); the status job compares end_date to today
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False, index=True)
    submission_deadline = db.Column(db.Date, nullable=True)

    prize_amount = db.Column(db.Numeric(12, 2), nullable=True)
    prize_currency = db.Column(db.String(8), nullable=True)

    organizer_name = db.Column(db.String(160), nullable=True)
    organizer_email = db.Column(db.String(255), nullable=True)

    featured = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True, default=utcnow)

    saved_by = db.relationship("SavedCompetition", back_populates="competition", lazy=True, cascade="all, delete-orphan")
    submissions = db.relationship("CompetitionSubmission", back_populates="competition", lazy=True, cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "submission_deadline": self.submission_deadline.isoformat() if self.submission_deadline else None,
            "prize_amount": float(self.prize_amount) if self.prize_amount is not None else None,
            "prize_currency": self.prize_currency,
            "organizer_name": self.organizer_name,
            "featured": bool(self.featured),
        }
