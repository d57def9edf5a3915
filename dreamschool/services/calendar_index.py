"""
Calendar event index: merges event streams into date markers and answers
date and window queries.
"""

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..core.entities import CalendarEvent, DateLike, Student, as_date
from ..core.enums import EVENT_KIND_COLORS, EventKind, MarkerColor, color_for_kind
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_DAYS = 7


@dataclass(frozen=True)
class DateMarker:
    """Display hint for a date, taken from the last event ingested on it."""
    date: date
    kind: str
    color: MarkerColor
    event_id: str

    def to_dict(self) -> Dict[str, object]:
        """Marker in the shape the calendar widget consumes."""
        return {
            'marked': True,
            'dotColor': self.color.value,
            'selectedColor': self.color.value,
        }


class CalendarEventIndex:
    """Date-keyed index over calendar events from several sources.

    Every ingested event stays queryable. The per-date marker, however, is
    overwritten by each later event on the same date, so a day holding both a
    holiday and a birthday shows only the color of whichever arrived last.
    """

    def __init__(self, upcoming_days: int = DEFAULT_UPCOMING_DAYS,
                 today: Callable[[], date] = date.today):
        if upcoming_days < 0:
            raise ValidationError(f"upcoming_days must be non-negative, got {upcoming_days}")
        self._upcoming_days = upcoming_days
        self._today = today
        self._events: List[CalendarEvent] = []
        self._by_date: Dict[date, List[CalendarEvent]] = defaultdict(list)
        self._markers: Dict[date, DateMarker] = {}

    def ingest(self, events: Iterable[CalendarEvent]) -> int:
        """Append a batch of events and overwrite the markers of their dates."""
        count = 0
        for event in events:
            self._events.append(event)
            self._by_date[event.date].append(event)

            previous = self._markers.get(event.date)
            if previous is not None and previous.kind != event.kind:
                logger.debug("Marker for %s overwritten: %s -> %s",
                             event.date.isoformat(), previous.kind, event.kind)
            self._markers[event.date] = DateMarker(
                date=event.date,
                kind=event.kind,
                color=color_for_kind(event.kind),
                event_id=event.id,
            )
            count += 1
        logger.debug("Ingested %d calendar events (%d total)", count, len(self._events))
        return count

    def events_on(self, day: DateLike) -> List[CalendarEvent]:
        """Events on a date, in ingestion order."""
        return list(self._by_date.get(as_date(day), ()))

    def events_in_window(self, start: DateLike, end_inclusive: DateLike) -> List[CalendarEvent]:
        """Events with ``start <= date <= end_inclusive``, ascending by date.

        Events sharing a date keep their ingestion order.
        """
        start_day = as_date(start)
        end_day = as_date(end_inclusive)
        matching = [e for e in self._events if start_day <= e.date <= end_day]
        # sorted() is stable, so equal dates keep ingestion order
        return sorted(matching, key=lambda e: e.date)

    def marker_for(self, day: DateLike) -> Optional[DateMarker]:
        return self._markers.get(as_date(day))

    def markers(self) -> Dict[str, DateMarker]:
        """Snapshot of all markers keyed by ISO date string."""
        return {day.isoformat(): marker for day, marker in sorted(self._markers.items())}

    def today(self, today: Optional[DateLike] = None) -> List[CalendarEvent]:
        """Events on today's date."""
        return self.events_on(today if today is not None else self._today())

    def upcoming(self, today: Optional[DateLike] = None, days: Optional[int] = None) -> List[CalendarEvent]:
        """Events from today through ``today + days`` inclusive."""
        start = as_date(today) if today is not None else self._today()
        span = self._upcoming_days if days is None else days
        if isinstance(span, bool) or not isinstance(span, int) or span < 0:
            raise ValidationError(f"days must be a non-negative integer, got {span!r}", details={"days": span})
        try:
            end = start + timedelta(days=span)
        except OverflowError:
            end = date.max
        return self.events_in_window(start, end)

    @staticmethod
    def legend() -> List[Tuple[EventKind, MarkerColor]]:
        return list(EVENT_KIND_COLORS.items())

    def __len__(self) -> int:
        return len(self._events)


def birthday_events(students: Iterable[Student], year: int,
                    title_format: str = "{name}") -> List[CalendarEvent]:
    """Birthday events for the given year, one per student.

    A 29 February birthday falls on 28 February in non-leap years. Event IDs
    are derived from the student ID and year so re-generating is stable.
    """
    if isinstance(year, bool) or not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Invalid year: {year!r}", details={"year": year})
    events = []
    for student in students:
        born = student.birth_date
        day = born.day
        if born.month == 2 and day == 29 and not calendar.isleap(year):
            day = 28
        events.append(CalendarEvent(
            title=title_format.format(name=student.name),
            event_date=date(year, born.month, day),
            kind=EventKind.BIRTHDAY,
            description=None,
            entity_id=f"birthday-{student.id}-{year}",
        ))
    return events
