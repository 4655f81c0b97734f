import logging

from flask import Blueprint, g, jsonify, request

from api_utils import delete_each, get_storage, json_body, not_found, to_json, user_id_required, validation_error
from forms import ExpenseForm

logger = logging.getLogger(__name__)

expenses_bp = Blueprint('expenses', __name__, url_prefix='/api/expenses')


@expenses_bp.route('', methods=['POST'])
def create_expense():
    form = ExpenseForm.from_json(json_body())
    if not form.validate():
        return validation_error(form)

    expense = get_storage().create_expense(form.payload())
    logger.info("Recorded %.2f %s expense for user %s", expense['amount'], expense['category'], expense['user_id'])
    return jsonify(to_json(expense)), 201


@expenses_bp.route('', methods=['GET'])
@user_id_required
def list_expenses():
    storage = get_storage()
    category = request.args.get('category')
    if category:
        expenses = storage.get_expenses_by_category(g.user_id, category)
    else:
        expenses = storage.get_expenses(g.user_id)
    return jsonify([to_json(e) for e in expenses])


@expenses_bp.route('/<int:id>', methods=['GET'])
def get_expense(id):
    expense = get_storage().get_expense(id)
    if not expense:
        return not_found("Expense")
    return jsonify(to_json(expense))


@expenses_bp.route('/<int:id>', methods=['PATCH'])
def update_expense(id):
    form = ExpenseForm.from_json(json_body(), partial=True)
    if not form.validate():
        return validation_error(form)

    data = form.payload()
    if data.get('date', True) is None:
        del data['date']

    expense = get_storage().update_expense(id, data)
    if not expense:
        return not_found("Expense")
    return jsonify(to_json(expense))


@expenses_bp.route('/<int:id>', methods=['DELETE'])
def delete_expense(id):
    if not get_storage().delete_expense(id):
        return not_found("Expense")
    return '', 204


@expenses_bp.route('/all', methods=['DELETE'])
@user_id_required
def delete_all_expenses():
    storage = get_storage()
    deleted = delete_each(storage.get_expenses(g.user_id), storage.delete_expense)
    logger.info("Deleted %d expenses for user %s", deleted, g.user_id)
    return jsonify(message=f"{deleted} expenses deleted successfully", deleted=deleted)
