from ics import Calendar, Event
from app.models.domain import TripOut
from datetime import datetime, timedelta


def _parse_day_date(value: str | None):
    if not value:
        return None
    # support both YYYY-MM-DD (standard) and DD-MM-YYYY
    for fmt in ("%Y-%m-%d", "%d-%m-%Y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_time(value: str | None):
    if not value:
        return None
    for fmt in ("%H:%M", "%I:%M %p", "%I%p"):
        try:
            return datetime.strptime(value.strip().upper(), fmt).time()
        except ValueError:
            continue
    return None


def generate_trip_ics(trip: TripOut) -> bytes:
    """
    Builds an iCalendar (.ics) file for a trip.

    Each day plan becomes an all-day event; each activity becomes a one-hour
    event at its own time when that parses, otherwise in sequential slots
    starting at 09:00. Days without a usable date fall back to
    start_date + (day - 1).
    """
    cal = Calendar()

    if not trip.itinerary:
        # No plan yet: a single all-day event spanning the whole trip
        event = Event()
        event.name = f"Trip to {trip.destination}"
        event.begin = datetime.combine(trip.start_date, datetime.min.time())
        event.end = datetime.combine(
            trip.end_date + timedelta(days=1), datetime.min.time()
        )
        event.make_all_day()
        cal.events.add(event)
        return cal.serialize().encode("utf-8")

    for index, day in enumerate(trip.itinerary):
        day_number = day.day if day.day and day.day >= 1 else index + 1
        current_day_date = _parse_day_date(day.date) or (
            trip.start_date + timedelta(days=day_number - 1)
        )

        summary_event = Event()
        summary_event.name = f"Day {day_number}: {trip.destination} Trip"
        summary_event.begin = datetime.combine(current_day_date, datetime.min.time())
        summary_event.make_all_day()
        summary_event.description = f"{len(day.activities)} planned activities"
        cal.events.add(summary_event)

        next_slot = datetime.combine(
            current_day_date, datetime.strptime("09:00", "%H:%M").time()
        )

        for activity in day.activities:
            event = Event()
            event.name = f"{activity.activity or 'Activity'} ({trip.destination})"
            details = [activity.notes or ""]
            if activity.location:
                event.location = activity.location
                details.append(f"Location: {activity.location}")
            event.description = "\n\n".join(d for d in details if d)

            start_time = _parse_time(activity.time)
            if start_time:
                begin = datetime.combine(current_day_date, start_time)
            else:
                begin = next_slot
            event.begin = begin
            event.duration = timedelta(hours=1)
            cal.events.add(event)

            # Next untimed activity starts after this one + 30 min travel buffer
            next_slot = max(next_slot, begin) + timedelta(hours=1, minutes=30)

    return cal.serialize().encode("utf-8")
