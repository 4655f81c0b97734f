import logging
from config import Config
from models import db

logger = logging.getLogger(__name__)


def init_db(app):
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise RuntimeError("Set DATABASE_URL or MYSQL_HOST before initialising the database")
    with app.app_context():
        db.create_all()
        logger.info("Created tables on %s", db.engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    from app import create_app
    init_db(create_app(Config))
