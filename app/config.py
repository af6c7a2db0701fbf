import os

class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///competitions.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # No default: admin login stays disabled until this is set
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

    # Comma-separated list of admin emails, e.g. "host@example.com,other@example.com"
    ADMIN_EMAILS = os.getenv("ADMIN_EMAILS", "")

    RESEND_API_KEY = os.getenv("RESEND_API_KEY", None)
    RESEND_FROM_EMAIL = os.getenv("RESEND_FROM_EMAIL", None)
    CONTACT_TO_EMAIL = os.getenv("CONTACT_TO_EMAIL", "hello@quokkamole.com")
