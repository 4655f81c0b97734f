import logging

from flask import Blueprint, g, jsonify, request

from api_utils import delete_each, get_storage, json_body, not_found, to_json, user_id_required, validation_error
from forms import GoalForm

logger = logging.getLogger(__name__)

goals_bp = Blueprint('goals', __name__, url_prefix='/api/goals')


@goals_bp.route('', methods=['POST'])
def create_goal():
    form = GoalForm.from_json(json_body())
    if not form.validate():
        return validation_error(form)

    # a null direction is inferred from category and name on read
    goal = get_storage().create_goal(form.payload())
    logger.info("Created goal '%s' for user %s", goal['name'], goal['user_id'])
    return jsonify(to_json(goal)), 201


@goals_bp.route('', methods=['GET'])
@user_id_required
def list_goals():
    storage = get_storage()
    category = request.args.get('category')
    if category:
        goals = storage.get_goals_by_category(g.user_id, category)
    else:
        goals = storage.get_goals(g.user_id)
    return jsonify([to_json(goal) for goal in goals])


@goals_bp.route('/<int:id>', methods=['GET'])
def get_goal(id):
    goal = get_storage().get_goal(id)
    if not goal:
        return not_found("Goal")
    return jsonify(to_json(goal))


@goals_bp.route('/<int:id>', methods=['PATCH'])
def update_goal(id):
    form = GoalForm.from_json(json_body(), partial=True)
    if not form.validate():
        return validation_error(form)

    goal = get_storage().update_goal(id, form.payload())
    if not goal:
        return not_found("Goal")
    return jsonify(to_json(goal))


@goals_bp.route('/<int:id>', methods=['DELETE'])
def delete_goal(id):
    if not get_storage().delete_goal(id):
        return not_found("Goal")
    return '', 204


@goals_bp.route('/all', methods=['DELETE'])
@user_id_required
def delete_all_goals():
    storage = get_storage()
    deleted = delete_each(storage.get_goals(g.user_id), storage.delete_goal)
    logger.info("Deleted %d goals for user %s", deleted, g.user_id)
    return jsonify(message=f"{deleted} goals deleted successfully", deleted=deleted)
