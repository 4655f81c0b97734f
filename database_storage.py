from models import db, User, Activity, Expense, Goal, Device, Backup
from storage import Storage


def _rows(query):
    return [row.to_dict() for row in db.session.execute(query).scalars().all()]


class DatabaseStorage(Storage):
    """Maps storage calls straight onto the relational tables. Needs an app context."""

    def _create(self, model, data):
        row = model(**data)
        db.session.add(row)
        db.session.commit()
        return row.to_dict()

    def _get(self, model, id):
        row = db.session.get(model, id)
        return row.to_dict() if row is not None else None

    def _update(self, model, id, data):
        row = db.session.get(model, id)
        if row is None:
            return None
        for key, value in data.items():
            setattr(row, key, value)
        db.session.commit()
        return row.to_dict()

    def _delete(self, model, id):
        row = db.session.get(model, id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    def _owned_by(self, model, user_id, category=None, order_field='created_at'):
        query = db.select(model).where(model.user_id == user_id)
        if category is not None:
            query = query.where(model.category == category)
        order_column = getattr(model, order_field)
        query = query.order_by(order_column.desc(), model.id.desc())
        return _rows(query)

    # Users
    def get_user(self, id):
        return self._get(User, id)

    def get_user_by_username(self, username):
        row = db.session.execute(
            db.select(User).where(User.username == username)
        ).scalar_one_or_none()
        return row.to_dict() if row is not None else None

    def create_user(self, data):
        return self._create(User, data)

    def update_user(self, id, data):
        return self._update(User, id, data)

    # Activities
    def create_activity(self, data):
        return self._create(Activity, data)

    def get_activities(self, user_id):
        return self._owned_by(Activity, user_id)

    def get_activities_by_category(self, user_id, category):
        return self._owned_by(Activity, user_id, category)

    def get_activity(self, id):
        return self._get(Activity, id)

    def update_activity(self, id, data):
        return self._update(Activity, id, data)

    def delete_activity(self, id):
        return self._delete(Activity, id)

    # Expenses
    def create_expense(self, data):
        data = {key: value for key, value in data.items() if not (key == 'date' and value is None)}
        return self._create(Expense, data)

    def get_expenses(self, user_id):
        return self._owned_by(Expense, user_id, order_field='date')

    def get_expenses_by_category(self, user_id, category):
        return self._owned_by(Expense, user_id, category, order_field='date')

    def get_expense(self, id):
        return self._get(Expense, id)

    def update_expense(self, id, data):
        return self._update(Expense, id, data)

    def delete_expense(self, id):
        return self._delete(Expense, id)

    # Goals
    def create_goal(self, data):
        return self._create(Goal, data)

    def get_goals(self, user_id):
        return self._owned_by(Goal, user_id)

    def get_goals_by_category(self, user_id, category):
        return self._owned_by(Goal, user_id, category)

    def get_goal(self, id):
        return self._get(Goal, id)

    def update_goal(self, id, data):
        return self._update(Goal, id, data)

    def delete_goal(self, id):
        return self._delete(Goal, id)

    # Devices
    def create_device(self, data):
        return self._create(Device, data)

    def get_devices(self, user_id):
        query = (
            db.select(Device)
            .where(Device.user_id == user_id)
            .order_by(Device.last_synced.is_(None), Device.last_synced.desc(), Device.id)
        )
        return _rows(query)

    def get_device(self, id):
        return self._get(Device, id)

    def update_device(self, id, data):
        return self._update(Device, id, data)

    def delete_device(self, id):
        return self._delete(Device, id)

    # Backups
    def create_backup(self, data):
        return self._create(Backup, data)

    def get_backups(self, user_id):
        return self._owned_by(Backup, user_id)
