"""
GitHub GraphQL query templates and utilities.
Handles query construction and response parsing for the contribution calendar.
"""

from datetime import date, datetime, time
from typing import Any, Optional


# GraphQL query to fetch the day-by-day contribution calendar of a user
CONTRIBUTION_CALENDAR_QUERY = """
query GetContributionCalendar($username: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $username) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def format_datetime_for_github(dt: Optional[datetime]) -> Optional[str]:
    """
    Format datetime for GitHub GraphQL API (ISO 8601 format).

    Args:
        dt: Datetime to format

    Returns:
        ISO 8601 formatted string or None

    Example:
        >>> from datetime import datetime
        >>> dt = datetime(2026, 1, 4, 12, 0, 0)
        >>> format_datetime_for_github(dt)
        '2026-01-04T12:00:00Z'
    """
    if dt is None:
        return None

    # GitHub expects ISO 8601 format with 'Z' suffix
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def build_calendar_variables(username: str, from_date: date, to_date: date) -> dict:
    """
    Build variables for the contribution calendar query.

    The window covers ``from_date`` 00:00:00 through ``to_date`` 23:59:59.
    GitHub rejects windows longer than one year.

    Args:
        username: GitHub login
        from_date: First day of the window
        to_date: Last day of the window

    Returns:
        Dictionary of query variables
    """
    if to_date < from_date:
        raise ValueError(f"Invalid window: {from_date} is after {to_date}")

    return {
        "username": username,
        "from": format_datetime_for_github(datetime.combine(from_date, time.min)),
        "to": format_datetime_for_github(datetime.combine(to_date, time(23, 59, 59))),
    }


def parse_contribution_calendar(data: dict[str, Any]) -> Optional[list[tuple[date, int]]]:
    """
    Flatten the weeks/days structure of a calendar response.

    Returns:
        List of (date, count) pairs in response order, or None when the
        user does not exist (``user`` is null)
    """
    user = data.get("user")
    if user is None:
        return None

    calendar = user["contributionsCollection"]["contributionCalendar"]
    days: list[tuple[date, int]] = []
    for week in calendar.get("weeks", []):
        for day in week.get("contributionDays", []):
            days.append((date.fromisoformat(day["date"]), int(day["contributionCount"])))
    return days
