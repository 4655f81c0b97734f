import logging
from datetime import datetime

from flask import Blueprint, g, jsonify

from api_utils import get_storage, json_body, not_found, to_json, user_id_required, validation_error
from forms import DeviceForm

logger = logging.getLogger(__name__)

devices_bp = Blueprint('devices', __name__, url_prefix='/api/devices')


@devices_bp.route('', methods=['POST'])
def create_device():
    form = DeviceForm.from_json(json_body())
    if not form.validate():
        return validation_error(form)

    device = get_storage().create_device(form.payload())
    logger.info("Registered device %s (%s) for user %s", device['name'], device['device_id'], device['user_id'])
    return jsonify(to_json(device)), 201


@devices_bp.route('', methods=['GET'])
@user_id_required
def list_devices():
    devices = get_storage().get_devices(g.user_id)
    return jsonify([to_json(d) for d in devices])


@devices_bp.route('/<int:id>', methods=['PATCH'])
def update_device(id):
    form = DeviceForm.from_json(json_body(), partial=True)
    if not form.validate():
        return validation_error(form)

    device = get_storage().update_device(id, form.payload())
    if not device:
        return not_found("Device")
    return jsonify(to_json(device))


@devices_bp.route('/<int:id>/sync', methods=['POST'])
def sync_device(id):
    # No transport exists; a sync only stamps the device.
    device = get_storage().update_device(id, {'last_synced': datetime.now()})
    if not device:
        return not_found("Device")
    logger.info("Marked device %s as synced", id)
    return jsonify(to_json(device))
