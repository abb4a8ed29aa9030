import logging
from flask import Flask
from flask_cors import CORS
from taskmaster.config import Config
from taskmaster.extensions import db
from taskmaster.routes.api import api_bp

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    CORS(app)
    db.init_app(app)

    # Connect once at start; an unreachable store stops the process here
    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            logger.exception("Database bootstrap failed: %s", e)
            raise

    app.register_blueprint(api_bp)
    return app
