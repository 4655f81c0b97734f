import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from config import Config
from routes.users import users_bp
from routes.activities import activities_bp
from routes.expenses import expenses_bp
from routes.goals import goals_bp
from routes.devices import devices_bp
from routes.data import data_bp
from routes.dashboard import dashboard_bp

logger = logging.getLogger("lifetrack")


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config.get('LOG_LEVEL', 'INFO'))

    config_class.init_storage(app)
    logger.info("Using %s", type(app.storage).__name__)

    app.register_blueprint(users_bp)
    app.register_blueprint(activities_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(goals_bp)
    app.register_blueprint(devices_bp)
    app.register_blueprint(data_bp)
    app.register_blueprint(dashboard_bp)

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify(message=e.description), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error")
        return jsonify(message="Internal server error"), 500


app = create_app()
