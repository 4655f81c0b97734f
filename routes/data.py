import csv
import io
import logging
from datetime import datetime

from flask import Blueprint, Response, g, jsonify, request

from api_utils import get_storage, json_body, not_found, to_json, user_id_required
from forms import ActivityForm, DeviceForm, ExpenseForm, GoalForm

logger = logging.getLogger(__name__)

data_bp = Blueprint('data', __name__, url_prefix='/api')

COLLECTIONS = ('activities', 'expenses', 'goals', 'devices')

IMPORT_FORMS = {
    'activities': ActivityForm,
    'expenses': ExpenseForm,
    'goals': GoalForm,
    'devices': DeviceForm,
}

CSV_COLUMNS = {
    'activities': ['id', 'userId', 'category', 'description', 'startTime', 'endTime', 'duration', 'createdAt'],
    'expenses': ['id', 'userId', 'amount', 'category', 'description', 'date', 'createdAt'],
    'goals': ['id', 'userId', 'name', 'category', 'targetValue', 'currentValue', 'unit', 'active',
              'direction', 'createdAt'],
}


def build_snapshot(storage, user_id):
    """The export payload: every owned collection plus the time it was taken."""
    return {
        'activities': [to_json(a) for a in storage.get_activities(user_id)],
        'expenses': [to_json(e) for e in storage.get_expenses(user_id)],
        'goals': [to_json(goal) for goal in storage.get_goals(user_id)],
        'devices': [to_json(d) for d in storage.get_devices(user_id)],
        'exportDate': datetime.now().isoformat(),
    }


@data_bp.route('/export', methods=['GET'])
@user_id_required
def export_data():
    storage = get_storage()
    snapshot = build_snapshot(storage, g.user_id)
    storage.create_backup({'user_id': g.user_id, 'data': snapshot})
    logger.info(
        "Exported %s for user %s",
        ', '.join(f"{len(snapshot[name])} {name}" for name in COLLECTIONS),
        g.user_id,
    )
    return jsonify(snapshot)


@data_bp.route('/export/csv', methods=['GET'])
@user_id_required
def export_csv():
    collection = request.args.get('collection', 'activities')
    if collection not in CSV_COLUMNS:
        return jsonify(message=f"Unsupported collection '{collection}'"), 400

    storage = get_storage()
    records = getattr(storage, f"get_{collection}")(g.user_id)

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS[collection], extrasaction='ignore')
    writer.writeheader()
    for record in records:
        writer.writerow(to_json(record))

    filename = f"lifetrack_{collection}_{datetime.now().date().isoformat()}.csv"
    return Response(
        buffer.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )


def _parse_import(body):
    """Checks the envelope of an import body; returns (user_id, data, error)."""
    user_id = body.get('userId')
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None, None, "userId: Expected an integer"
    data = body.get('data')
    if not isinstance(data, dict):
        return None, None, "data: Expected an object"
    for name in COLLECTIONS:
        if not isinstance(data.get(name), list):
            return None, None, f"data.{name}: Expected an array"
    if not isinstance(data.get('exportDate'), str):
        return None, None, "data.exportDate: Expected a string"
    return user_id, data, None


@data_bp.route('/import', methods=['POST'])
def import_data():
    user_id, data, error = _parse_import(json_body())
    if error:
        return jsonify(message=error), 400

    storage = get_storage()
    if not storage.get_user(user_id):
        return not_found("User")

    validated = {name: [] for name in COLLECTIONS}
    for name in COLLECTIONS:
        for index, record in enumerate(data[name]):
            if not isinstance(record, dict):
                return jsonify(message=f"{name}[{index}]: Expected an object"), 400
            form = IMPORT_FORMS[name].from_json(dict(record, userId=user_id))
            if not form.validate():
                return jsonify(message=f"{name}[{index}]: {form.error_message()}"), 400
            validated[name].append(form.payload())

    storage.create_backup({'user_id': user_id, 'data': build_snapshot(storage, user_id)})

    # Records always come back as new rows; ids in the file are ignored.
    for activity in validated['activities']:
        storage.create_activity(activity)
    for expense in validated['expenses']:
        storage.create_expense(expense)
    for goal in validated['goals']:
        storage.create_goal(goal)
    for device in validated['devices']:
        storage.create_device(device)

    results = {name: len(validated[name]) for name in COLLECTIONS}
    logger.info("Imported %s for user %s", results, user_id)
    return jsonify(message="Data imported successfully", importResults=results)


@data_bp.route('/backups', methods=['GET'])
@user_id_required
def list_backups():
    backups = get_storage().get_backups(g.user_id)
    return jsonify([to_json(b) for b in backups])


@data_bp.route('/backups/latest', methods=['GET'])
@user_id_required
def latest_backup():
    backup = get_storage().get_latest_backup(g.user_id)
    if not backup:
        return not_found("Backup")
    return jsonify(to_json(backup))
