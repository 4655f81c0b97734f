"""
LifeTrack Test Suite

This package contains tests for the LifeTrack API:

- test_aggregation.py: Period windows, time allocation, expense summaries, goal progress
- test_storage.py: Storage contract, run against MemStorage and DatabaseStorage
- test_users.py: User create/read/update
- test_activities.py: Activity CRUD and bulk delete
- test_expenses.py: Expense CRUD and bulk delete
- test_goals.py: Goal CRUD and goal direction
- test_devices.py: Device registration and simulated sync
- test_data.py: Export, CSV export, import and backups
- test_dashboard.py: Dashboard aggregates over the API
- test_forms.py: JSON body validation

Run all tests:
    pytest tests/

Run specific test file:
    pytest tests/test_aggregation.py

Run with verbose output:
    pytest tests/ -v
"""
