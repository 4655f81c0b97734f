from datetime import datetime

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

ACTIVITY_CATEGORIES = (
    'social_media',
    'gaming',
    'reading',
    'lectures',
    'practice',
    'sleep',
    'salah',
)

EXPENSE_CATEGORIES = (
    'food',
    'transport',
    'entertainment',
    'shopping',
    'utilities',
    'other',
)

GOAL_CATEGORIES = ACTIVITY_CATEGORIES + EXPENSE_CATEGORIES

AT_MOST = 'atMost'
AT_LEAST = 'atLeast'
GOAL_DIRECTIONS = (AT_MOST, AT_LEAST)


class RecordMixin:
    """Converts a row into the plain dict shape shared by every storage backend."""

    def to_dict(self):
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}


class User(RecordMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), nullable=False, unique=True)
    password = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(100), nullable=False)
    dark_mode = db.Column(db.Boolean, default=False)


class Activity(RecordMixin, db.Model):
    __tablename__ = 'activities'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    category = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime)
    # seconds; authoritative over start_time/end_time
    duration = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)


class Expense(RecordMixin, db.Model):
    __tablename__ = 'expenses'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.DateTime, nullable=False, default=datetime.now)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)


class Goal(RecordMixin, db.Model):
    __tablename__ = 'goals'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(50), nullable=False)
    target_value = db.Column(db.Float, nullable=False)
    current_value = db.Column(db.Float, default=0)
    unit = db.Column(db.String(50), nullable=False)
    active = db.Column(db.Boolean, default=True)
    # NULL for rows written before direction was stored; inferred on read
    direction = db.Column(db.String(10))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)


class Device(RecordMixin, db.Model):
    __tablename__ = 'devices'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    device_id = db.Column(db.String(100), nullable=False)
    last_synced = db.Column(db.DateTime)
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)


class Backup(RecordMixin, db.Model):
    __tablename__ = 'backups'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    data = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
