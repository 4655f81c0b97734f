import logging
from datetime import date, datetime
from functools import wraps

from flask import current_app, g, jsonify, request

logger = logging.getLogger(__name__)


def user_id_required(fn):
    """Resolves ``?userId=`` into ``g.user_id`` for the request, or answers 400."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            g.user_id = int(request.args['userId'])
        except (KeyError, ValueError):
            return jsonify(message="Invalid user ID"), 400
        return fn(*args, **kwargs)
    return wrapper


def get_storage():
    return current_app.storage


def camel_case(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def json_value(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_json(record, exclude=()):
    """Storage record to its wire shape: camelCase keys, ISO-8601 timestamps."""
    return {camel_case(key): json_value(value) for key, value in record.items() if key not in exclude}


def json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def validation_error(form):
    message = form.error_message()
    logger.info("Rejected %s %s: %s", request.method, request.path, message)
    return jsonify(message=message), 400


def not_found(entity):
    return jsonify(message=f"{entity} not found"), 404


def delete_each(records, delete):
    """
    Deletes records one at a time and returns how many went.

    Not atomic: the first storage error ends the run and whatever was already
    deleted stays deleted.
    """
    deleted = 0
    for record in records:
        try:
            if delete(record['id']):
                deleted += 1
        except Exception:
            logger.exception("Bulk delete stopped at id %s after %d deletions", record['id'], deleted)
            break
    return deleted
