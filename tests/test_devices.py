"""
Test suite for device routes.
Tests cover device registration, updates and the simulated sync.
"""

import pytest
import os
import sys
from datetime import datetime, timedelta

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


def register_device(client, **overrides):
    body = {'userId': 1, 'name': 'Phone', 'deviceId': 'phone-abc'}
    body.update(overrides)
    response = client.post('/api/devices', json=body)
    assert response.status_code == 201
    return response.get_json()


class TestDevices:
    """Test device registration and listing."""

    def test_register_device(self, client):
        """New devices are active and have never synced."""
        data = register_device(client)
        assert data['deviceId'] == 'phone-abc'
        assert data['active'] is True
        assert data['lastSynced'] is None

    def test_missing_device_id_rejected(self, client):
        """deviceId is required."""
        response = client.post('/api/devices', json={'userId': 1, 'name': 'Phone'})
        assert response.status_code == 400
        assert 'deviceId' in response.get_json()['message']

    def test_list_orders_by_last_sync(self, client):
        """Recently synced devices come first, never-synced ones last."""
        never = register_device(client, name='Tablet', deviceId='tab')
        old = register_device(client, name='Laptop', deviceId='lap', lastSynced='2024-05-01T08:00:00')
        recent = register_device(client, name='Phone', deviceId='ph', lastSynced='2024-05-14T08:00:00')

        response = client.get('/api/devices?userId=1')
        assert [d['id'] for d in response.get_json()] == [recent['id'], old['id'], never['id']]

    def test_list_requires_user_id(self, client):
        """Listing without a userId is a 400."""
        assert client.get('/api/devices').status_code == 400

    def test_update_device(self, client):
        """Devices can be renamed and deactivated."""
        device = register_device(client)
        response = client.patch(f"/api/devices/{device['id']}", json={'name': 'Old Phone', 'active': False})
        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'Old Phone'
        assert data['active'] is False
        assert data['deviceId'] == 'phone-abc'

    def test_update_missing_device(self, client):
        """Unknown ids are a 404."""
        assert client.patch('/api/devices/5', json={'name': 'x'}).status_code == 404


class TestDeviceSync:
    """Test the simulated sync."""

    def test_sync_stamps_last_synced(self, client):
        """A sync sets lastSynced to now."""
        device = register_device(client)
        before = datetime.now() - timedelta(seconds=1)
        response = client.post(f"/api/devices/{device['id']}/sync")
        assert response.status_code == 200
        assert datetime.fromisoformat(response.get_json()['lastSynced']) >= before

    def test_sync_missing_device(self, client):
        """Syncing an unknown device is a 404."""
        response = client.post('/api/devices/5/sync')
        assert response.status_code == 404
        assert response.get_json()['message'] == 'Device not found'
