import logging

from flask import Flask
from flask_cors import CORS

from fintrack.auth.routes import auth_bp
from fintrack.auth.sessions import init_sessions
from fintrack.backup.routes import backup_bp
from fintrack.config import Config
from fintrack.errors import register_error_handlers
from fintrack.ledger.routes import ledger_bp
from fintrack.notifications.routes import notifications_bp
from fintrack.planning.routes import planning_bp
from fintrack.reports.routes import reports_bp
from fintrack.storage import init_storage


def create_app(config_object=Config, storage=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app, origins=app.config.get("CORS_ORIGINS", "*"), supports_credentials=True)

    init_storage(app, storage)
    init_sessions(app)
    register_error_handlers(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(ledger_bp)
    app.register_blueprint(planning_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(backup_bp)

    return app
