"""
Test suite for expense routes.
Tests cover expense CRUD, amount validation and bulk deletion.
"""

import pytest
import os
import sys
from datetime import datetime, timedelta

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


def create_expense(client, **overrides):
    body = {
        'userId': 1,
        'amount': 12.5,
        'category': 'food',
        'description': 'Lunch',
        'date': '2024-05-15T12:00:00',
    }
    body.update(overrides)
    response = client.post('/api/expenses', json=body)
    assert response.status_code == 201
    return response.get_json()


class TestCreateExpense:
    """Test recording expenses."""

    def test_create_expense(self, client):
        """Valid expenses are created with a 201."""
        data = create_expense(client)
        assert data['amount'] == 12.5
        assert data['category'] == 'food'
        assert data['date'] == '2024-05-15T12:00:00'

    def test_date_defaults_to_now(self, client):
        """Expenses without a date are dated at creation."""
        before = datetime.now() - timedelta(seconds=1)
        data = create_expense(client, date=None)
        assert datetime.fromisoformat(data['date']) >= before

    def test_integer_amount_accepted(self, client):
        """Whole-number amounts are fine."""
        assert create_expense(client, amount=20)['amount'] == 20

    @pytest.mark.parametrize('amount', [0, -5, 'ten', True])
    def test_bad_amount_rejected(self, client, amount):
        """Amounts must be positive numbers."""
        response = client.post('/api/expenses', json={
            'userId': 1, 'amount': amount, 'category': 'food',
        })
        assert response.status_code == 400
        assert 'amount' in response.get_json()['message']

    def test_unknown_category_rejected(self, client):
        """Categories outside the fixed set are a 400."""
        response = client.post('/api/expenses', json={'userId': 1, 'amount': 5, 'category': 'travel'})
        assert response.status_code == 400


class TestListExpenses:
    """Test listing expenses."""

    def test_requires_user_id(self, client):
        """Listing without a userId is a 400."""
        assert client.get('/api/expenses').status_code == 400

    def test_newest_date_first(self, client):
        """Expenses are ordered by date, most recent first."""
        older = create_expense(client, date='2024-05-01T09:00:00')
        newer = create_expense(client, date='2024-05-10T09:00:00')
        response = client.get('/api/expenses?userId=1')
        assert [e['id'] for e in response.get_json()] == [newer['id'], older['id']]

    def test_category_filter(self, client):
        """The category query parameter narrows the list."""
        create_expense(client)
        transport = create_expense(client, category='transport')
        response = client.get('/api/expenses?userId=1&category=transport')
        assert [e['id'] for e in response.get_json()] == [transport['id']]


class TestSingleExpense:
    """Test fetching, updating and deleting one expense."""

    def test_get_missing_expense(self, client):
        """Unknown ids are a 404."""
        response = client.get('/api/expenses/7')
        assert response.status_code == 404
        assert response.get_json()['message'] == 'Expense not found'

    def test_partial_update(self, client):
        """PATCH changes only the supplied fields."""
        created = create_expense(client)
        response = client.patch(f"/api/expenses/{created['id']}", json={'amount': 15})
        assert response.status_code == 200
        data = response.get_json()
        assert data['amount'] == 15
        assert data['description'] == 'Lunch'

    def test_null_date_keeps_existing(self, client):
        """A null date in a PATCH leaves the stored date alone."""
        created = create_expense(client)
        response = client.patch(f"/api/expenses/{created['id']}", json={'date': None})
        assert response.status_code == 200
        assert response.get_json()['date'] == created['date']

    def test_delete_expense(self, client):
        """DELETE removes the expense."""
        created = create_expense(client)
        assert client.delete(f"/api/expenses/{created['id']}").status_code == 204
        assert client.delete(f"/api/expenses/{created['id']}").status_code == 404


class TestDeleteAllExpenses:
    """Test bulk deletion."""

    def test_delete_all(self, client):
        """Every expense of the user is removed and counted."""
        create_expense(client)
        create_expense(client)
        response = client.delete('/api/expenses/all?userId=1')
        assert response.get_json() == {'message': '2 expenses deleted successfully', 'deleted': 2}
        assert client.get('/api/expenses?userId=1').get_json() == []

    def test_delete_all_when_empty(self, client):
        """Nothing to delete still succeeds."""
        response = client.delete('/api/expenses/all?userId=1')
        assert response.status_code == 200
        assert response.get_json()['deleted'] == 0
