from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from db.models import Reservation
from reservation_desk.view_model import default_selected_date, today_key

CLOSED = "closed"
CREATE_OPEN = "create_open"
EDIT_OPEN = "edit_open"
DETAIL_OPEN = "detail_open"

FORM_FIELDS = ["contractor_name", "deceased_name", "date", "time", "staff_name"]


@dataclass
class NavigationState:
    year: int
    month: int  # 0-based
    selected_date: Optional[str] = None

    @classmethod
    def starting_at(cls, today: Optional[date] = None) -> "NavigationState":
        today = today or date.today()
        return cls(year=today.year, month=today.month - 1)

    def select_date(self, key: str) -> None:
        self.selected_date = key

    def set_year(self, year: int, reservations: Sequence[Reservation] = (), today: Optional[date] = None) -> None:
        self.year = int(year)
        self.selected_date = default_selected_date(self.year, self.month, reservations, today)

    def set_month(self, month: int, reservations: Sequence[Reservation] = (), today: Optional[date] = None) -> None:
        month = int(month)
        if not 0 <= month <= 11:
            raise ValueError(f"month must be 0-11, got {month}")
        self.month = month
        self.selected_date = default_selected_date(self.year, self.month, reservations, today)

    def go_to_today(self, today: Optional[date] = None) -> None:
        today = today or date.today()
        self.year = today.year
        self.month = today.month - 1
        self.selected_date = today_key(today)

    def ensure_selection(self, reservations: Sequence[Reservation] = (), today: Optional[date] = None) -> str:
        if not self.selected_date:
            self.selected_date = default_selected_date(self.year, self.month, reservations, today)
        return self.selected_date


def year_options(today: Optional[date] = None, span: int = 5) -> List[int]:
    today = today or date.today()
    return list(range(today.year - span, today.year + span + 1))


@dataclass
class ReservationForm:
    contractor_name: str = ""
    deceased_name: str = ""
    date: str = ""
    time: str = ""
    staff_name: str = ""

    @classmethod
    def from_reservation(cls, r: Reservation) -> "ReservationForm":
        return cls(**{f: getattr(r, f) for f in FORM_FIELDS})

    def to_reservation(self, reservation_id: Any = None) -> Reservation:
        values = {f: str(getattr(self, f) or "").strip() for f in FORM_FIELDS}
        return Reservation(id=reservation_id, **values)

    def as_dict(self) -> Dict[str, str]:
        return {f: getattr(self, f) for f in FORM_FIELDS}


@dataclass
class ModalState:
    """Which panel is open: closed, create/edit form, or read-only detail."""

    mode: str = CLOSED
    editing_id: Any = None
    detail_id: Any = None
    form: ReservationForm = field(default_factory=ReservationForm)

    @property
    def is_open(self) -> bool:
        return self.mode != CLOSED

    def open_create(self, date_key: Optional[str] = None, slot: Optional[str] = None) -> None:
        self.editing_id = None
        self.detail_id = None
        self.form = ReservationForm(date=date_key or "", time=slot or "")
        self.mode = CREATE_OPEN

    def open_edit(self, reservation: Reservation) -> None:
        # Detail panel closes first
        self.detail_id = None
        self.editing_id = reservation.id
        self.form = ReservationForm.from_reservation(reservation)
        self.mode = EDIT_OPEN

    def open_detail(self, reservation: Reservation) -> None:
        self.editing_id = None
        self.detail_id = reservation.id
        self.mode = DETAIL_OPEN

    def close(self) -> None:
        self.mode = CLOSED
        self.editing_id = None
        self.detail_id = None
        self.form = ReservationForm()


@dataclass
class AppState:
    navigation: NavigationState
    modal: ModalState = field(default_factory=ModalState)

    @classmethod
    def initial(cls, today: Optional[date] = None) -> "AppState":
        return cls(navigation=NavigationState.starting_at(today))
