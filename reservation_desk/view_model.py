"""Pure derivations of calendar, day-schedule and side-panel data.

Nothing in here touches Streamlit; every function takes a reservation
snapshot and returns plain data for the page to draw.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from db.models import Reservation

DAY_SLOTS = ("10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00")

RECENT_LIMIT = 5

NO_TODAY_MESSAGE = "No reservations scheduled for today."
NO_RECENT_MESSAGE = "No reservations registered yet."

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

ORDINARY = "ordinary"
FIRST_WEEKDAY = "first-weekday"  # Sunday
LAST_WEEKDAY = "last-weekday"  # Saturday

AVAILABLE = "available"
BOOKED = "booked"


# ---------------- DATE HELPERS ----------------

def date_key(year: int, month: int, day: int) -> str:
    """ISO key for a 0-based month."""
    return f"{year}-{month + 1:02d}-{day:02d}"


def today_key(today: Optional[date] = None) -> str:
    today = today or date.today()
    return date_key(today.year, today.month - 1, today.day)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of day 1, 0=Sunday .. 6=Saturday."""
    return sunday_weekday(date(year, month + 1, 1))


def sunday_weekday(d: date) -> int:
    # date.weekday() is Monday-based
    return (d.weekday() + 1) % 7


# ---------------- CALENDAR ----------------

@dataclass(frozen=True)
class DayCell:
    day: int
    date_key: str
    kind: str
    reservation_count: int
    is_today: bool
    is_selected: bool


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    cells: Tuple[DayCell, ...]

    def weeks(self) -> List[List[Optional[DayCell]]]:
        """Rows of seven, blanks as None, for grid rendering."""
        slots: List[Optional[DayCell]] = [None] * self.leading_blanks + list(self.cells)
        slots += [None] * (-len(slots) % 7)
        return [slots[i:i + 7] for i in range(0, len(slots), 7)]


def _day_kind(weekday: int) -> str:
    if weekday == 0:
        return FIRST_WEEKDAY
    if weekday == 6:
        return LAST_WEEKDAY
    return ORDINARY


def build_calendar(
    year: int,
    month: int,
    reservations: Sequence[Reservation],
    selected_date: Optional[str] = None,
    today: Optional[date] = None,
) -> CalendarMonth:
    todays = today_key(today)
    leading = first_weekday(year, month)

    cells = []
    for day in range(1, days_in_month(year, month) + 1):
        key = date_key(year, month, day)
        count = len([r for r in reservations if r.date == key])
        cells.append(
            DayCell(
                day=day,
                date_key=key,
                kind=_day_kind((leading + day - 1) % 7),
                reservation_count=count,
                is_today=key == todays,
                is_selected=key == selected_date,
            )
        )

    return CalendarMonth(year=year, month=month, leading_blanks=leading, cells=tuple(cells))


def weekday_labels() -> Tuple[str, ...]:
    return WEEKDAY_LABELS


# ---------------- DAY SCHEDULE ----------------

@dataclass(frozen=True)
class SlotRow:
    slot: str
    label: str
    status: str
    reservation: Optional[Reservation] = None

    @property
    def is_booked(self) -> bool:
        return self.status == BOOKED


def slot_label(slot: str) -> str:
    hour = int(slot.split(":")[0])
    return f"{slot} - {hour + 1}:00"


def _creation_order(r: Reservation):
    # Earliest created first; rows without a timestamp go last
    return (r.created_at is None, r.created_at or "", str(r.id))


def build_day_schedule(
    day: str,
    reservations: Iterable[Reservation],
    slots: Sequence[str] = DAY_SLOTS,
) -> List[SlotRow]:
    booked = {}
    for r in sorted((r for r in reservations if r.date == day), key=_creation_order):
        # Duplicate (date, time) rows: the earliest created one keeps the slot
        booked.setdefault(r.time, r)

    rows = []
    for slot in slots:
        r = booked.get(slot)
        rows.append(SlotRow(slot=slot, label=slot_label(slot), status=BOOKED if r else AVAILABLE, reservation=r))
    return rows


# ---------------- TODAY / RECENT ----------------

def today_reservations(reservations: Iterable[Reservation], today: Optional[date] = None) -> List[Reservation]:
    key = today_key(today)
    return sorted((r for r in reservations if r.date == key), key=lambda r: r.time)


def recent_reservations(reservations: Iterable[Reservation], limit: int = RECENT_LIMIT) -> List[Reservation]:
    return sorted(reservations, key=lambda r: (r.date, r.time), reverse=True)[:limit]


def today_summary(r: Reservation) -> str:
    return f"[{r.time}] {r.deceased_name} ({r.contractor_name})"


def recent_summary(r: Reservation) -> str:
    return f"[{r.date}] {r.deceased_name} ({r.contractor_name})"


def booked_summary(r: Reservation) -> str:
    return f"Booked: {r.deceased_name} (contractor {r.contractor_name})"


def detail_fields(r: Reservation) -> List[Tuple[str, str]]:
    return [
        ("Contractor", r.contractor_name),
        ("Deceased", r.deceased_name),
        ("Date", r.date),
        ("Time", slot_label(r.time) if r.time else ""),
        ("Staff", r.staff_name),
    ]


def default_selected_date(
    year: int,
    month: int,
    reservations: Sequence[Reservation],
    today: Optional[date] = None,
) -> str:
    """Date to select after the displayed month changes.

    Today when it is in the displayed month, otherwise the first reserved
    day of that month, otherwise the 1st.
    """
    today = today or date.today()
    if today.year == year and today.month - 1 == month:
        return today_key(today)

    prefix = date_key(year, month, 1)[:8]
    for r in reservations:
        if r.date.startswith(prefix):
            return r.date
    return date_key(year, month, 1)
