import logging

from flask import Flask
from config import Config
from flask_sqlalchemy import SQLAlchemy
from flask_babel import Babel
from flask import current_app, session, request, has_request_context

db = SQLAlchemy()
babel = Babel()


def create_app(config_class=Config):
    app = Flask(__name__)
    if isinstance(config_class, type):
        config_class = config_class()
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    db.init_app(app)

    def get_locale():
        # Scheduler jobs and CLI commands run without a request
        if not has_request_context():
            return app.config["BABEL_DEFAULT_LOCALE"]

        # 1. Check for language in cookie first
        lang = request.cookies.get("language")
        if lang and lang in app.config["LANGUAGES"]:
            current_app.logger.debug(
                f"Locale selector: found language in cookie: {lang}")
            return lang

        # 2. Check session
        lang = session.get("language")
        if lang and lang in app.config["LANGUAGES"]:
            current_app.logger.debug(
                f"Locale selector: found language in session: {lang}")
            return lang

        # 3. Fallback to browser's preferred language
        return request.accept_languages.best_match(app.config["LANGUAGES"])

    babel.init_app(app, locale_selector=get_locale)

    from app import models

    from app.routes import register_blueprints
    register_blueprints(app)

    from app.cli import register_commands
    register_commands(app)

    with app.app_context():
        db.create_all()

        # Gate is derived from stored license state on every bootstrap
        from app.services.content_types import apply_license_gate
        apply_license_gate(app)

    if app.config.get('ENABLE_LICENSE_SCHEDULER'):
        from app.utils.scheduler import init_scheduler
        init_scheduler(app)

    return app
