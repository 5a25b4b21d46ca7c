import logging

from flask import Flask, jsonify

from .errors import RecordsError
from .extensions import db, migrate, login_manager

log = logging.getLogger("academic_records.web")


def configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    logger = logging.getLogger("academic_records")
    logger.setLevel(level)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


def register_error_handlers(app):
    @app.errorhandler(RecordsError)
    def records_error(exc):
        log.debug("request failed with %s: %s", exc.__class__.__name__, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Unauthorized", "message": "Login required"}), 401


def create_app(config_object="config.Config"):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    from . import models
    from .models import Account

    @login_manager.user_loader
    def load_user(account_id):
        return db.session.get(Account, int(account_id))

    from .blueprints.auth import bp as auth_bp
    from .blueprints.teacher import bp as teacher_bp
    from .blueprints.student import bp as student_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(teacher_bp, url_prefix="/teacher")
    app.register_blueprint(student_bp, url_prefix="/student")
    register_error_handlers(app)

    from .commands import register_commands
    register_commands(app)

    return app
