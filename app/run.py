from dotenv import load_dotenv

load_dotenv()

from app import create_app
from app.extensions import db
from app.routes import register_blueprints

api = create_app()

# Register all Blueprints (competitions, member, admin, contact)
register_blueprints(api)

def init_db():
    """Ensure DB tables exist."""
    db.create_all()

# Run DB bootstrap once at startup
with api.app_context():
    init_db()

if __name__ == "__main__":
    api.run(debug=True)
