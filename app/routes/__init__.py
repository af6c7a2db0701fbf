from .index import index_bp
from .admin import admin_bp
from .competitions import competitions_bp
from .member import member_bp
from .contact import contact_bp
from .client import client_bp

def register_blueprints(app):
    app.register_blueprint(index_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(competitions_bp)
    app.register_blueprint(member_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(client_bp)
