import logging

from flask import Blueprint, jsonify
from werkzeug.security import generate_password_hash

from api_utils import get_storage, json_body, not_found, to_json, validation_error
from forms import UserForm

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


def user_json(user):
    return to_json(user, exclude=('password',))


@users_bp.route('', methods=['POST'])
def create_user():
    form = UserForm.from_json(json_body())
    if not form.validate():
        return validation_error(form)

    storage = get_storage()
    data = form.payload()
    if storage.get_user_by_username(data['username']):
        return jsonify(message="Username already exists"), 400
    data['password'] = generate_password_hash(data['password'])

    user = storage.create_user(data)
    logger.info("Created user %s (%s)", user['id'], user['username'])
    return jsonify(user_json(user)), 201


@users_bp.route('/<int:id>', methods=['GET'])
def get_user(id):
    user = get_storage().get_user(id)
    if not user:
        return not_found("User")
    return jsonify(user_json(user))


@users_bp.route('/<int:id>', methods=['PATCH'])
def update_user(id):
    form = UserForm.from_json(json_body(), partial=True)
    if not form.validate():
        return validation_error(form)

    storage = get_storage()
    data = form.payload()
    if 'username' in data:
        existing = storage.get_user_by_username(data['username'])
        if existing and existing['id'] != id:
            return jsonify(message="Username already exists"), 400
    if 'password' in data:
        data['password'] = generate_password_hash(data['password'])

    user = storage.update_user(id, data)
    if not user:
        return not_found("User")
    return jsonify(user_json(user))
