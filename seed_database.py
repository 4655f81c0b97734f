"""
Fills the configured database with a week of sample data for the first user.

Each collection is only seeded when the user has none of it yet, so the
script can be re-run safely.
"""

import logging
import random
from datetime import datetime, timedelta

from werkzeug.security import generate_password_hash

from config import Config
from models import db, User

logger = logging.getLogger(__name__)

PRAYERS = [('Fajr', 5), ('Dhuhr', 13), ('Asr', 16), ('Maghrib', 19), ('Isha', 21)]
BOOKS = ['The Power of Habit', 'Atomic Habits', 'Deep Work', 'Quran', 'Psychology 101']
PLATFORMS = ['Instagram', 'Twitter', 'Facebook', 'TikTok', 'YouTube']
SUBJECTS = ['Mathematics', 'Computer Science', 'Physics', 'Economics', 'Islamic Studies']

SAMPLE_EXPENSES = [
    ('food', 'Groceries', 85.45),
    ('food', 'Restaurant', 45.75),
    ('food', 'Coffee shop', 12.35),
    ('transport', 'Gas', 52.10),
    ('transport', 'Public transit', 25.00),
    ('entertainment', 'Movies', 28.50),
    ('entertainment', 'Subscription', 15.99),
    ('shopping', 'Clothes', 78.95),
    ('shopping', 'Electronics', 129.99),
    ('utilities', 'Electricity', 95.45),
    ('utilities', 'Internet', 65.00),
    ('other', 'Miscellaneous', 35.25),
]

SAMPLE_GOALS = [
    ('Sleep 8 hours', 'sleep', 8, 'hours'),
    ('Social Media < 2 hours', 'social_media', 120, 'minutes'),
    ('Read 30 minutes', 'reading', 30, 'minutes'),
    ('Pray 5 times', 'salah', 5, 'prayers'),
    ('Keep food expenses < $100', 'food', 100, 'USD'),
]


def _session(user_id, category, description, start, minutes):
    return {
        'user_id': user_id,
        'category': category,
        'description': description,
        'start_time': start,
        'end_time': start + timedelta(minutes=minutes),
        'duration': minutes * 60,
    }


def sample_activities(user_id, now, rng):
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    activities = []
    for day in range(7):
        date = today - timedelta(days=day)

        for name, hour in rng.sample(PRAYERS, rng.randint(3, 5)):
            activities.append(_session(user_id, 'salah', f"{name} prayer", date.replace(hour=hour),
                                       rng.randint(5, 14)))

        if rng.random() > 0.3:
            activities.append(_session(user_id, 'reading', f"Reading {rng.choice(BOOKS)}",
                                       date.replace(hour=rng.randint(16, 21)), rng.randint(20, 79)))

        for _ in range(rng.randint(1, 3)):
            activities.append(_session(user_id, 'social_media', rng.choice(PLATFORMS),
                                       date.replace(hour=rng.randint(8, 21)), rng.randint(15, 59)))

        bedtime = (date - timedelta(days=1)).replace(hour=22, minute=rng.randint(0, 59))
        wake = date.replace(hour=6, minute=rng.randint(0, 59))
        activities.append({
            'user_id': user_id,
            'category': 'sleep',
            'description': 'Night sleep',
            'start_time': bedtime,
            'end_time': wake,
            'duration': int((wake - bedtime).total_seconds()),
        })

    for _ in range(rng.randint(3, 5)):
        date = today - timedelta(days=rng.randint(0, 6))
        activities.append(_session(user_id, 'lectures', f"{rng.choice(SUBJECTS)} lecture",
                                   date.replace(hour=rng.randint(9, 16)), rng.randint(60, 119)))
    return activities


def sample_expenses(user_id, now, rng):
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return [
        {
            'user_id': user_id,
            'category': category,
            'description': description,
            'amount': amount,
            'date': (today - timedelta(days=rng.randint(0, 6))).replace(hour=rng.randint(8, 19)),
        }
        for category, description, amount in SAMPLE_EXPENSES
    ]


def sample_goals(user_id, rng):
    return [
        {
            'user_id': user_id,
            'name': name,
            'category': category,
            'target_value': target,
            'current_value': round(rng.random() * target, 2),
            'unit': unit,
            'active': True,
        }
        for name, category, target, unit in SAMPLE_GOALS
    ]


def seed(storage, user_id, now=None, rng=None):
    """Seeds every empty collection for ``user_id``; returns what was added."""
    now = now or datetime.now()
    rng = rng or random.Random()
    added = {'activities': 0, 'expenses': 0, 'goals': 0}

    if not storage.get_activities(user_id):
        for activity in sample_activities(user_id, now, rng):
            storage.create_activity(activity)
            added['activities'] += 1
    if not storage.get_expenses(user_id):
        for expense in sample_expenses(user_id, now, rng):
            storage.create_expense(expense)
            added['expenses'] += 1
    if not storage.get_goals(user_id):
        for goal in sample_goals(user_id, rng):
            storage.create_goal(goal)
            added['goals'] += 1

    logger.info("Seeded user %s with %s", user_id, added)
    return added


def first_user_id(storage):
    first = db.session.execute(db.select(User).order_by(User.id)).scalars().first()
    if first is not None:
        return first.id
    user = storage.create_user({
        'username': 'user',
        'password': generate_password_hash('password'),
        'display_name': 'Demo User',
        'dark_mode': False,
    })
    logger.info("Created default user %s", user['id'])
    return user['id']


if __name__ == "__main__":
    from app import create_app
    from init_db import init_db

    app = create_app(Config)
    init_db(app)
    with app.app_context():
        seed(app.storage, first_user_id(app.storage))
