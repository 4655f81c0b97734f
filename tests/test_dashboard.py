"""
Test suite for dashboard routes.
Tests the aggregate views served over the API. The arithmetic itself is
covered in test_aggregation.py.
"""

import pytest
import os
import sys
from datetime import datetime, timedelta

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def tracked(client):
    """Today's activities, expenses and goals for user 1."""
    now = datetime.now().replace(microsecond=0)
    for category, duration in (('reading', 3600), ('reading', 1800), ('social_media', 5400)):
        client.post('/api/activities', json={
            'userId': 1, 'category': category, 'startTime': now.isoformat(), 'duration': duration,
        })
    client.post('/api/expenses', json={'userId': 1, 'amount': 150, 'category': 'food',
                                       'date': now.isoformat()})
    client.post('/api/expenses', json={'userId': 1, 'amount': 100, 'category': 'transport',
                                       'date': now.isoformat()})
    client.post('/api/goals', json={'userId': 1, 'name': 'Read for 2 hours', 'category': 'reading',
                                    'targetValue': 2, 'currentValue': 1.5, 'unit': 'hours'})
    client.post('/api/goals', json={'userId': 1, 'name': 'Social media < 1 hour', 'category': 'social_media',
                                    'targetValue': 1, 'currentValue': 1.5, 'unit': 'hours'})
    return now


class TestDashboard:
    """Test GET /api/dashboard."""

    def test_requires_user_id(self, client):
        """The dashboard needs a userId."""
        assert client.get('/api/dashboard').status_code == 400

    def test_invalid_period(self, client):
        """Unknown periods are a 400."""
        response = client.get('/api/dashboard?userId=1&period=yearly')
        assert response.status_code == 400
        assert 'yearly' in response.get_json()['message']

    def test_defaults_to_weekly(self, client):
        """Without a period the dashboard covers the current week."""
        data = client.get('/api/dashboard?userId=1').get_json()
        assert data['period'] == 'weekly'
        assert data['timeAllocation'] == []
        assert data['goalProgress'] == []

    def test_time_allocation_in_hours(self, client, tracked):
        """Activity seconds are summed per category and reported in hours."""
        data = client.get('/api/dashboard?userId=1&period=daily').get_json()
        hours = {row['category']: row['duration'] for row in data['timeAllocation']}
        assert hours == {'reading': 1.5, 'social_media': 1.5}

    def test_expense_summary(self, client, tracked):
        """Expenses are summed per category."""
        data = client.get('/api/dashboard?userId=1&period=monthly').get_json()
        amounts = {row['category']: row['amount'] for row in data['expenseSummary']}
        assert amounts == {'food': 150, 'transport': 100}

    def test_goal_progress(self, client, tracked):
        """Progress rows carry percentage and direction-aware flags."""
        data = client.get('/api/dashboard?userId=1').get_json()
        rows = {row['category']: row for row in data['goalProgress']}
        assert rows['reading']['percentage'] == 75
        assert rows['reading']['direction'] == 'atLeast'
        assert rows['reading']['isAboveTarget'] is False
        assert rows['social_media']['percentage'] == 150
        assert rows['social_media']['direction'] == 'atMost'
        assert rows['social_media']['isAboveTarget'] is True
        assert rows['reading']['display'] == '1h 30m / 2h 0m'

    def test_summary_cards(self, client, tracked):
        """Headline cards total the tracked time and spend against the budget."""
        summary = client.get('/api/dashboard?userId=1').get_json()['summary']
        assert summary['reading']['seconds'] == 5400
        assert summary['reading']['formatted'] == '1h 30m'
        assert summary['reading']['goalPercentage'] == 75
        assert summary['sleep']['seconds'] == 0
        assert summary['sleep']['goalPercentage'] == 100
        assert summary['expenses']['total'] == 250
        assert summary['expenses']['formatted'] == '$250.00'
        assert summary['expenses']['budgetPercentage'] == 25

    def test_other_users_excluded(self, client, tracked):
        """Another user's dashboard is empty."""
        data = client.get('/api/dashboard?userId=2').get_json()
        assert data['timeAllocation'] == []
        assert data['summary']['expenses']['total'] == 0


class TestWeeklyBreakdown:
    """Test GET /api/dashboard/weekly."""

    def test_seven_days_oldest_first(self, client):
        """The breakdown always has seven days ending today."""
        data = client.get('/api/dashboard/weekly?userId=1').get_json()
        assert len(data) == 7
        assert data[-1]['date'] == datetime.now().date().isoformat()
        assert all(day['hours'] == {} for day in data)

    def test_hours_land_on_their_day(self, client, tracked):
        """Today's activities are bucketed under today."""
        yesterday = tracked - timedelta(days=1)
        client.post('/api/activities', json={
            'userId': 1, 'category': 'sleep', 'startTime': yesterday.isoformat(), 'duration': 7200,
        })
        data = client.get('/api/dashboard/weekly?userId=1').get_json()
        assert data[-1]['hours'] == {'reading': 1.5, 'social_media': 1.5}
        assert data[-2]['hours'] == {'sleep': 2.0}
