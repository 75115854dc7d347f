"""
Calendar service: month grid of a trip's stops.
"""
import calendar
from datetime import date
from typing import Dict, List, Optional
from app.core.exceptions import ValidationError
from app.models.activity import TripActivity
from app.models.trip_stop import TripStop

# Weeks start on Sunday
_calendar = calendar.Calendar(firstweekday=calendar.SUNDAY)


def stop_covers(stop: TripStop, day: date) -> bool:
    """A stop covers every day from its start date to its end date, inclusive."""
    if not stop.start_date or not stop.end_date:
        return False
    return stop.start_date <= day <= stop.end_date


def _stop_summary(stop: TripStop) -> Dict:
    return {
        "id": stop.id,
        "seq": stop.seq,
        "city_name": stop.city.name if stop.city else "Unknown City",
        "start_date": stop.start_date,
        "end_date": stop.end_date
    }


def build_month_grid(
    year: int,
    month: int,
    stops: List[TripStop],
    selected: Optional[date] = None,
    today: Optional[date] = None
) -> List[List[Dict]]:
    """Full Sunday-first weeks covering the month, one dict per day."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")

    today = today or date.today()
    weeks = []
    for week in _calendar.monthdatescalendar(year, month):
        days = []
        for day in week:
            day_stops = [_stop_summary(stop) for stop in stops if stop_covers(stop, day)]
            days.append({
                "date": day,
                "is_current_month": day.month == month,
                "is_today": day == today,
                "is_selected": selected is not None and day == selected,
                "has_trips": len(day_stops) > 0,
                "stops": day_stops
            })
        weeks.append(days)
    return weeks


def stops_for_date(stops: List[TripStop], day: date) -> List[Dict]:
    return [_stop_summary(stop) for stop in stops if stop_covers(stop, day)]


def activities_for_date(stops: List[TripStop], day: date) -> List[TripActivity]:
    """Activities of every stop covering the day."""
    activities = []
    for stop in stops:
        if stop_covers(stop, day):
            activities.extend(stop.activities)
    return activities
