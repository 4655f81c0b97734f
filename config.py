import os
from dotenv import load_dotenv

load_dotenv()


def _mysql_url():
    host = os.getenv('MYSQL_HOST')
    if not host:
        return None
    user = os.getenv('MYSQL_USER', '')
    password = os.getenv('MYSQL_PASSWORD', '')
    database = os.getenv('MYSQL_DATABASE', 'lifetrack_db')
    return f"mysql+mysqlconnector://{user}:{password}@{host}/{database}"


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL') or _mysql_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MONTHLY_BUDGET = float(os.getenv('MONTHLY_BUDGET', '1000'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @staticmethod
    def init_storage(app):
        if app.config.get('SQLALCHEMY_DATABASE_URI'):
            from models import db
            from database_storage import DatabaseStorage
            db.init_app(app)
            app.storage = DatabaseStorage()
        else:
            from storage import MemStorage
            app.storage = MemStorage()
