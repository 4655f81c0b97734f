import logging

from flask import Blueprint, g, jsonify, request

from api_utils import delete_each, get_storage, json_body, not_found, to_json, user_id_required, validation_error
from forms import ActivityForm

logger = logging.getLogger(__name__)

activities_bp = Blueprint('activities', __name__, url_prefix='/api/activities')


@activities_bp.route('', methods=['POST'])
def create_activity():
    form = ActivityForm.from_json(json_body())
    if not form.validate():
        return validation_error(form)

    activity = get_storage().create_activity(form.payload())
    logger.info("Logged %ss of %s for user %s", activity['duration'], activity['category'], activity['user_id'])
    return jsonify(to_json(activity)), 201


@activities_bp.route('', methods=['GET'])
@user_id_required
def list_activities():
    storage = get_storage()
    category = request.args.get('category')
    if category:
        activities = storage.get_activities_by_category(g.user_id, category)
    else:
        activities = storage.get_activities(g.user_id)
    return jsonify([to_json(a) for a in activities])


@activities_bp.route('/<int:id>', methods=['GET'])
def get_activity(id):
    activity = get_storage().get_activity(id)
    if not activity:
        return not_found("Activity")
    return jsonify(to_json(activity))


@activities_bp.route('/<int:id>', methods=['PATCH'])
def update_activity(id):
    form = ActivityForm.from_json(json_body(), partial=True)
    if not form.validate():
        return validation_error(form)

    activity = get_storage().update_activity(id, form.payload())
    if not activity:
        return not_found("Activity")
    return jsonify(to_json(activity))


@activities_bp.route('/<int:id>', methods=['DELETE'])
def delete_activity(id):
    if not get_storage().delete_activity(id):
        return not_found("Activity")
    return '', 204


@activities_bp.route('/all', methods=['DELETE'])
@user_id_required
def delete_all_activities():
    storage = get_storage()
    deleted = delete_each(storage.get_activities(g.user_id), storage.delete_activity)
    logger.info("Deleted %d activities for user %s", deleted, g.user_id)
    return jsonify(message=f"{deleted} activities deleted successfully", deleted=deleted)
