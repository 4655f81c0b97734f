"""
Storage interface and the in-memory backend.

Every backend hands back plain dicts keyed by column name, so handlers never
care which one is configured. ``MemStorage`` is a development fallback: it
has no locking and loses everything on restart.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEFAULTS = {
    'users': {'dark_mode': False},
    'activities': {'description': None, 'end_time': None},
    'expenses': {'description': None, 'date': None},
    'goals': {'current_value': 0, 'active': True, 'direction': None},
    'devices': {'last_synced': None, 'active': True},
    'backups': {},
}


class Storage(ABC):

    # Users
    @abstractmethod
    def get_user(self, id): ...

    @abstractmethod
    def get_user_by_username(self, username): ...

    @abstractmethod
    def create_user(self, data): ...

    @abstractmethod
    def update_user(self, id, data): ...

    # Activities
    @abstractmethod
    def create_activity(self, data): ...

    @abstractmethod
    def get_activities(self, user_id): ...

    @abstractmethod
    def get_activities_by_category(self, user_id, category): ...

    @abstractmethod
    def get_activity(self, id): ...

    @abstractmethod
    def update_activity(self, id, data): ...

    @abstractmethod
    def delete_activity(self, id): ...

    # Expenses
    @abstractmethod
    def create_expense(self, data): ...

    @abstractmethod
    def get_expenses(self, user_id): ...

    @abstractmethod
    def get_expenses_by_category(self, user_id, category): ...

    @abstractmethod
    def get_expense(self, id): ...

    @abstractmethod
    def update_expense(self, id, data): ...

    @abstractmethod
    def delete_expense(self, id): ...

    # Goals
    @abstractmethod
    def create_goal(self, data): ...

    @abstractmethod
    def get_goals(self, user_id): ...

    @abstractmethod
    def get_goals_by_category(self, user_id, category): ...

    @abstractmethod
    def get_goal(self, id): ...

    @abstractmethod
    def update_goal(self, id, data): ...

    @abstractmethod
    def delete_goal(self, id): ...

    # Devices
    @abstractmethod
    def create_device(self, data): ...

    @abstractmethod
    def get_devices(self, user_id): ...

    @abstractmethod
    def get_device(self, id): ...

    @abstractmethod
    def update_device(self, id, data): ...

    @abstractmethod
    def delete_device(self, id): ...

    # Backups
    @abstractmethod
    def create_backup(self, data): ...

    @abstractmethod
    def get_backups(self, user_id): ...

    def get_latest_backup(self, user_id):
        backups = self.get_backups(user_id)
        return backups[0] if backups else None


def _newest_first(records, field='created_at'):
    return sorted(records, key=lambda r: (r[field], r['id']), reverse=True)


def _recently_synced_first(devices):
    # never-synced devices go last, in insertion order
    by_id = sorted(devices, key=lambda d: d['id'])
    return sorted(
        by_id,
        key=lambda d: (d['last_synced'] is not None, d['last_synced'] or datetime.min),
        reverse=True,
    )


class MemStorage(Storage):

    def __init__(self, seed=True):
        self._tables = {name: {} for name in DEFAULTS}
        self._next_ids = {name: 1 for name in DEFAULTS}
        if seed:
            self._seed_demo_data()

    def _seed_demo_data(self):
        user = self.create_user({
            'username': 'demo',
            'password': generate_password_hash('password'),
            'display_name': 'Demo User',
            'dark_mode': False,
        })
        demo_goals = [
            ('Sleep 8 hours', 'sleep', 8, 7.2, 'hours'),
            ('Social Media < 2 hours', 'social_media', 2, 1.75, 'hours'),
            ('Read for 2 hours', 'reading', 2, 2.5, 'hours'),
            ('Practice questions (30)', 'practice', 30, 35, 'count'),
            ('Gaming < 1 hour', 'gaming', 1, 0.75, 'hours'),
        ]
        for name, category, target, current, unit in demo_goals:
            self.create_goal({
                'user_id': user['id'],
                'name': name,
                'category': category,
                'target_value': target,
                'current_value': current,
                'unit': unit,
                'active': True,
            })
        logger.info("Seeded in-memory storage with demo user %s", user['id'])

    def _insert(self, table, data, timestamped=True):
        id = self._next_ids[table]
        self._next_ids[table] += 1
        record = dict(DEFAULTS[table])
        record.update(data)
        record['id'] = id
        if timestamped:
            record['created_at'] = datetime.now()
        self._tables[table][id] = record
        return dict(record)

    def _get(self, table, id):
        record = self._tables[table].get(id)
        return dict(record) if record is not None else None

    def _update(self, table, id, data):
        record = self._tables[table].get(id)
        if record is None:
            return None
        record.update(data)
        return dict(record)

    def _delete(self, table, id):
        return self._tables[table].pop(id, None) is not None

    def _owned_by(self, table, user_id, category=None):
        return [
            dict(r) for r in self._tables[table].values()
            if r['user_id'] == user_id and (category is None or r['category'] == category)
        ]

    # Users
    def get_user(self, id):
        return self._get('users', id)

    def get_user_by_username(self, username):
        for user in self._tables['users'].values():
            if user['username'] == username:
                return dict(user)
        return None

    def create_user(self, data):
        return self._insert('users', data, timestamped=False)

    def update_user(self, id, data):
        return self._update('users', id, data)

    # Activities
    def create_activity(self, data):
        return self._insert('activities', data)

    def get_activities(self, user_id):
        return _newest_first(self._owned_by('activities', user_id))

    def get_activities_by_category(self, user_id, category):
        return _newest_first(self._owned_by('activities', user_id, category))

    def get_activity(self, id):
        return self._get('activities', id)

    def update_activity(self, id, data):
        return self._update('activities', id, data)

    def delete_activity(self, id):
        return self._delete('activities', id)

    # Expenses
    def create_expense(self, data):
        data = dict(data)
        if data.get('date') is None:
            data['date'] = datetime.now()
        return self._insert('expenses', data)

    def get_expenses(self, user_id):
        return _newest_first(self._owned_by('expenses', user_id), field='date')

    def get_expenses_by_category(self, user_id, category):
        return _newest_first(self._owned_by('expenses', user_id, category), field='date')

    def get_expense(self, id):
        return self._get('expenses', id)

    def update_expense(self, id, data):
        return self._update('expenses', id, data)

    def delete_expense(self, id):
        return self._delete('expenses', id)

    # Goals
    def create_goal(self, data):
        return self._insert('goals', data)

    def get_goals(self, user_id):
        return _newest_first(self._owned_by('goals', user_id))

    def get_goals_by_category(self, user_id, category):
        return _newest_first(self._owned_by('goals', user_id, category))

    def get_goal(self, id):
        return self._get('goals', id)

    def update_goal(self, id, data):
        return self._update('goals', id, data)

    def delete_goal(self, id):
        return self._delete('goals', id)

    # Devices
    def create_device(self, data):
        return self._insert('devices', data)

    def get_devices(self, user_id):
        return _recently_synced_first(self._owned_by('devices', user_id))

    def get_device(self, id):
        return self._get('devices', id)

    def update_device(self, id, data):
        return self._update('devices', id, data)

    def delete_device(self, id):
        return self._delete('devices', id)

    # Backups
    def create_backup(self, data):
        return self._insert('backups', data)

    def get_backups(self, user_id):
        return _newest_first(self._owned_by('backups', user_id))
