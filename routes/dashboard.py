from flask import Blueprint, current_app, g, jsonify, request

from aggregation import (
    PERIODS,
    dashboard_summary,
    expense_summary,
    goal_progress,
    time_allocation,
    weekly_breakdown,
)
from api_utils import get_storage, to_json, user_id_required

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@dashboard_bp.route('', methods=['GET'])
@user_id_required
def index():
    period = request.args.get('period', 'weekly')
    if period not in PERIODS:
        return jsonify(message=f"Invalid period '{period}'"), 400

    storage = get_storage()
    activities = storage.get_activities(g.user_id)
    expenses = storage.get_expenses(g.user_id)
    goals = storage.get_goals(g.user_id)

    return jsonify(
        period=period,
        timeAllocation=[to_json(row) for row in time_allocation(activities, period)],
        expenseSummary=expense_summary(expenses, period),
        goalProgress=goal_progress(goals),
        summary=dashboard_summary(activities, expenses, goals, current_app.config.get('MONTHLY_BUDGET', 1000)),
    )


@dashboard_bp.route('/weekly', methods=['GET'])
@user_id_required
def weekly():
    activities = get_storage().get_activities(g.user_id)
    return jsonify(weekly_breakdown(activities))
