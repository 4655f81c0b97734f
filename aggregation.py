"""
Chart and dashboard aggregates derived from raw record lists.

Everything here is a pure function of its arguments. ``now`` is injectable so
callers and tests can pin the clock; it defaults to the host's local time.
Empty input always produces empty output.
"""

import math
from collections import defaultdict
from datetime import datetime, timedelta

from models import AT_LEAST, AT_MOST

PERIODS = ('daily', 'weekly', 'monthly')
WEEKDAY_NAMES = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')
CEILING_CATEGORIES = ('social_media', 'gaming')
MAX_GOAL_PERCENTAGE = 200


def period_start(period, now=None):
    now = now or datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == 'daily':
        return midnight
    if period == 'weekly':
        # weekday() counts from Monday; weeks here start on Sunday
        days_since_sunday = (midnight.weekday() + 1) % 7
        return midnight - timedelta(days=days_since_sunday)
    if period == 'monthly':
        return midnight.replace(day=1)
    raise ValueError(f"Unknown period '{period}', expected one of {', '.join(PERIODS)}")


def filter_by_period(records, period, field, now=None):
    start = period_start(period, now)
    return [r for r in records if r.get(field) is not None and r[field] >= start]


def _sum_by_category(records, value_field):
    totals = defaultdict(float)
    for record in records:
        totals[record['category']] += record[value_field] or 0
    return totals


def time_allocation(activities, period='weekly', now=None):
    """Hours per activity category since the start of ``period``."""
    now = now or datetime.now()
    in_period = filter_by_period(activities, period, 'start_time', now)
    totals = _sum_by_category(in_period, 'duration')
    return [
        {'category': category, 'duration': seconds / 3600, 'date': now}
        for category, seconds in totals.items()
    ]


def weekly_breakdown(activities, now=None):
    """
    Per-day hours for the past seven calendar days, oldest first.

    Buckets are keyed by calendar date; the weekday name is only a label.
    """
    now = now or datetime.now()
    today = now.date()
    days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
    buckets = {
        day: {'name': WEEKDAY_NAMES[(day.weekday() + 1) % 7], 'date': day.isoformat(), 'hours': {}}
        for day in days
    }
    for activity in activities:
        start = activity.get('start_time')
        if start is None:
            continue
        bucket = buckets.get(start.date())
        if bucket is None:
            continue
        hours = bucket['hours']
        hours[activity['category']] = hours.get(activity['category'], 0) + activity['duration'] / 3600
    return [buckets[day] for day in days]


def expense_summary(expenses, period='weekly', now=None):
    in_period = filter_by_period(expenses, period, 'date', now)
    totals = _sum_by_category(in_period, 'amount')
    return [{'category': category, 'amount': amount} for category, amount in totals.items()]


def total_expenses(expenses):
    return sum(expense['amount'] for expense in expenses)


def infer_goal_direction(goal):
    """The legacy rule: ceiling goals are social media, gaming, or named with '<'."""
    if '<' in (goal.get('name') or '') or goal.get('category') in CEILING_CATEGORIES:
        return AT_MOST
    return AT_LEAST


def goal_direction(goal):
    return goal.get('direction') or infer_goal_direction(goal)


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def goal_percentage(current, target, clamp=True):
    if not target or target <= 0:
        return 0
    percentage = _round_half_up((current or 0) / target * 100)
    return min(percentage, MAX_GOAL_PERCENTAGE) if clamp else percentage


def is_above_target(current, target, direction):
    current = current or 0
    if direction == AT_MOST:
        return current > target
    return current >= target


def goal_progress(goals):
    progress = []
    for goal in goals:
        direction = goal_direction(goal)
        current = goal.get('current_value') or 0
        target = goal['target_value']
        progress.append({
            'goalId': goal['id'],
            'name': goal['name'],
            'category': goal['category'],
            'targetValue': target,
            'currentValue': current,
            'unit': goal['unit'],
            'direction': direction,
            'percentage': goal_percentage(current, target),
            'isAboveTarget': is_above_target(current, target, direction),
            'display': f"{format_goal_value(current, goal['unit'])} / {format_goal_value(target, goal['unit'])}",
        })
    return progress


def format_duration(seconds):
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours == 0:
        return f"{minutes}m"
    return f"{hours}h {minutes}m"


def format_money(amount):
    sign = '-' if amount < 0 else ''
    return f"{sign}${abs(amount):,.2f}"


def format_goal_value(value, unit):
    if unit == 'hours':
        hours = int(math.floor(value))
        minutes = _round_half_up((value - hours) * 60)
        return f"{hours}h {minutes}m"
    if unit == 'USD':
        return format_money(value)
    return f"{value:g} {unit}"


def _category_seconds(activities, category):
    return sum(a['duration'] for a in activities if a['category'] == category)


def _first_goal_percentage(goals, category):
    for goal in goals:
        if goal['category'] == category:
            return goal_percentage(goal.get('current_value'), goal['target_value'], clamp=False)
    return 100


def dashboard_summary(activities, expenses, goals, monthly_budget):
    """Headline cards: all-time category totals, spend against budget, goal percentages."""
    summary = {}
    for category in ('social_media', 'sleep', 'reading'):
        seconds = _category_seconds(activities, category)
        summary[category] = {
            'seconds': seconds,
            'formatted': format_duration(seconds),
            'goalPercentage': _first_goal_percentage(goals, category),
        }
    spent = total_expenses(expenses)
    summary['expenses'] = {
        'total': spent,
        'formatted': format_money(spent),
        'budget': monthly_budget,
        'budgetPercentage': _round_half_up(spent / monthly_budget * 100) if monthly_budget else 0,
    }
    return summary
