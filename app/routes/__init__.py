from app.routes.admin import bp as admin_bp
from app.routes.content import bp as content_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(admin_bp)
    app.register_blueprint(content_bp)
