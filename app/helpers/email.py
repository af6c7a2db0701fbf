import sys
from markupsafe import escape
from flask import current_app
import resend

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def admin_emails() -> set:
    raw = current_app.config.get("ADMIN_EMAILS") or ""
    return {
        e.strip().lower()
        for e in raw.split(",")
        if e.strip()
    }

def is_admin_email(email: str) -> bool:
    """Return True if this email is configured as an admin."""
    if not email:
        return False
    return normalize_email(email) in admin_emails()

def build_contact_email(first_name: str, last_name: str, email: str, subject: str, message: str) -> str:
    return (
        "New Contact Form Submission\n"
        "\n"
        f"From: {first_name} {last_name}\n"
        f"Email: {email}\n"
        f"Subject: {subject}\n"
        "\n"
        "Message:\n"
        f"{message}"
    )

def send_contact_message_via_email(first_name: str, last_name: str, email: str, subject: str, message: str):
    """
    Forward a contact form submission to the site inbox via Resend.

    - If RESEND_API_KEY is not set, just log to stderr (local dev).
    - Unlike the notification emails, failures propagate: the caller
      has to tell the visitor their message didn't go through.
    """
    text = build_contact_email(first_name, last_name, email, subject, message)

    api_key = current_app.config.get("RESEND_API_KEY")
    to_email = current_app.config.get("CONTACT_TO_EMAIL")

    # Dev / fallback path
    if not api_key:
        print(f"[CONTACT - DEV ONLY] {to_email} <- {text}", file=sys.stderr)
        return

    resend.api_key = api_key
    params = {
        "from": current_app.config.get("RESEND_FROM_EMAIL"),
        "to": [to_email],
        "reply_to": email,
        "subject": f"Contact Form: {subject}",
        "text": text,
    }
    resend.Emails.send(params)
    print(f"[CONTACT] Forwarded contact message from {email}", file=sys.stderr)

def verification_email_body(status: str, result) -> str:
    """
    HTML body for a verification outcome. `result` is the member's
    TierResult after the review; only a rank-4 result may claim Rank 4.
    """
    if status != "approved":
        return "<p>We couldn't verify your identity document. Please upload a new one from your profile.</p>"

    if result.level == 4:
        return "<p>Your identity has been verified. You've reached Rank 4 🎉</p>"

    steps = "".join(f"<li>{escape(line.lstrip('• '))}</li>" for line in result.next_level_requirements[1:])
    header = escape(result.next_level_requirements[0]) if result.next_level_requirements else ""
    return (
        f"<p>Your identity has been verified. You're currently at Rank {result.level}.</p>"
        f"<p>{header}</p>"
        f"<ul>{steps}</ul>"
    )

def send_verification_result_via_email(email: str, status: str, result):
    """
    Let a member know their identity document was reviewed.
    Failures are logged, never raised.
    """
    api_key = current_app.config.get("RESEND_API_KEY")

    # Dev / fallback path
    if not api_key:
        print(f"[VERIFICATION - DEV ONLY] {email} -> {status} (rank {result.level})", file=sys.stderr)
        return

    body = verification_email_body(status, result)

    html = f"""
      <div style="font-family: system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 16px;">
        <p>Hi there 👋</p>
        {body}
      </div>
    """

    try:
        resend.api_key = api_key
        params = {
            "from": current_app.config.get("RESEND_FROM_EMAIL"),
            "to": [email],
            "subject": "Your identity verification result",
            "html": html,
        }
        resend.Emails.send(params)
        print(f"[VERIFICATION] Sent verification result to {email}", file=sys.stderr)
    except Exception as e:
        # Don't fail the admin action if email fails; just log it.
        print(f"[VERIFICATION] Failed to send via Resend: {e}", file=sys.stderr)
