"""
Form validation rules applied before any write.

Each validator collects a {field: message} map and raises ValidationError
with the map in details["errors"] when a rule fails. The first message is
used as the error message so clients can show it directly.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional
from app.core.config import settings
from app.core.exceptions import ValidationError

TRIP_NAME_MIN_LENGTH = 3
TRIP_NAME_MAX_LENGTH = 100


def _raise_if_errors(errors: Dict[str, str]) -> None:
    if errors:
        first_message = next(iter(errors.values()))
        raise ValidationError(first_message, details={"errors": errors})


def validate_trip_form(name: Optional[str], start_date: Optional[date], end_date: Optional[date]) -> None:
    """Trip create/edit form: name length and an ordered date range."""
    errors: Dict[str, str] = {}

    trimmed = (name or "").strip()
    if not trimmed:
        errors["name"] = "Please enter a trip name."
    elif len(trimmed) < TRIP_NAME_MIN_LENGTH:
        errors["name"] = "Trip name must be at least 3 characters."
    elif len(trimmed) > TRIP_NAME_MAX_LENGTH:
        errors["name"] = "Trip name must be less than 100 characters."

    if not start_date:
        errors["start_date"] = "Please select a start date."
    if not end_date:
        errors["end_date"] = "Please select an end date."

    # Same-day trips are allowed
    if start_date and end_date and end_date < start_date:
        errors["date_range"] = "End date must be after start date."

    _raise_if_errors(errors)


def validate_stop_form(city_id: Optional[int], start_date: Optional[date], end_date: Optional[date]) -> None:
    """Adding a city to a trip."""
    errors: Dict[str, str] = {}

    if not city_id:
        errors["city_id"] = "City ID is required"
    if not start_date:
        errors["start_date"] = "Start date is required"
    if not end_date:
        errors["end_date"] = "End date is required"
    if start_date and end_date and end_date < start_date:
        errors["end_date"] = "End date must be after start date"

    _raise_if_errors(errors)


def validate_stop_dates(start_date: Optional[date], end_date: Optional[date]) -> None:
    """Date range of an existing stop after an edit."""
    if start_date and end_date and end_date < start_date:
        _raise_if_errors({"end_date": "End date must be after start date"})


def validate_trip_activity_form(
    activity_id: Optional[int],
    scheduled_date: Optional[date],
    today: Optional[date] = None
) -> None:
    """Scheduling a catalog activity on a stop."""
    errors: Dict[str, str] = {}
    today = today or date.today()

    if not activity_id:
        errors["activity_id"] = "Activity ID is required"
    if not scheduled_date:
        errors["scheduled_date"] = "Scheduled date is required"
    elif scheduled_date < today:
        errors["scheduled_date"] = "Scheduled date cannot be in the past"

    _raise_if_errors(errors)


def validate_accommodation_form(
    accommodation_id: Optional[int],
    check_in_date: Optional[date],
    check_out_date: Optional[date]
) -> None:
    """Booking a stay; check-out must fall on a later day than check-in."""
    errors: Dict[str, str] = {}

    if not accommodation_id:
        errors["accommodation_id"] = "Accommodation is required"
    if not check_in_date:
        errors["check_in_date"] = "Check-in date is required"
    if not check_out_date:
        errors["check_out_date"] = "Check-out date is required"
    if check_in_date and check_out_date and check_out_date <= check_in_date:
        errors["check_out_date"] = "Check-out date must be after check-in date"

    _raise_if_errors(errors)


def validate_transport_form(
    from_city_id: Optional[int],
    to_city_id: Optional[int],
    transport_mode: Optional[str],
    provider: Optional[str],
    departure_time: Optional[datetime],
    arrival_time: Optional[datetime],
    cost: Optional[Decimal],
    currency_id: Optional[int]
) -> None:
    """Transport leg form."""
    errors: Dict[str, str] = {}

    if not from_city_id:
        errors["from_city_id"] = "From city is required"
    if not to_city_id:
        errors["to_city_id"] = "To city is required"
    if not transport_mode:
        errors["transport_mode"] = "Transport mode is required"
    if not provider:
        errors["provider"] = "Provider is required"
    if not departure_time:
        errors["departure_time"] = "Departure time is required"
    if not arrival_time:
        errors["arrival_time"] = "Arrival time is required"
    if cost is None:
        errors["cost"] = "Cost is required"
    elif cost < 0:
        errors["cost"] = "Cost cannot be negative"
    if not currency_id:
        errors["currency_id"] = "Currency is required"

    if from_city_id and to_city_id and from_city_id == to_city_id:
        errors["to_city_id"] = "Destination city must be different from origin city"

    if departure_time and arrival_time and arrival_time <= departure_time:
        errors["arrival_time"] = "Arrival time must be after departure time"

    _raise_if_errors(errors)


def validate_transport_cost_form(
    from_city_id: Optional[int],
    to_city_id: Optional[int],
    mode: Optional[str],
    avg_cost: Optional[Decimal]
) -> None:
    """Reference cost between two cities."""
    errors: Dict[str, str] = {}

    if not mode or not mode.strip():
        errors["mode"] = "Transport mode is required"
    if avg_cost is not None and avg_cost < 0:
        errors["avg_cost"] = "Cost cannot be negative"
    if from_city_id and to_city_id and from_city_id == to_city_id:
        errors["to_city_id"] = "Destination city must be different from origin city"

    _raise_if_errors(errors)


def validate_cover_photo(content_type: Optional[str], size: int) -> None:
    """Uploaded cover photo: size cap and allowed image types."""
    if size > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ValidationError(f"File size must be less than {limit_mb}MB", details={"size": size})
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationError("Please upload a JPG, PNG, or WEBP image", details={"content_type": content_type})


def calculate_nights(check_in_date: date, check_out_date: date) -> int:
    """Nights stayed between check-in and check-out."""
    return (check_out_date - check_in_date).days


def calculate_days(start_date: Optional[date], end_date: Optional[date]) -> int:
    """Inclusive number of days covered by a date range, 0 when incomplete."""
    if not start_date or not end_date:
        return 0
    return (end_date - start_date).days + 1
