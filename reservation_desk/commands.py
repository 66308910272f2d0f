from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from reservation_desk.state import (
    AppState,
    EDIT_OPEN,
    FORM_FIELDS,
    ReservationForm,
)
from reservation_desk.store import ReservationStore

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "contractor_name": "Contractor name",
    "deceased_name": "Deceased name",
    "date": "Date",
    "time": "Time",
    "staff_name": "Staff name",
}


def missing_fields(form: ReservationForm) -> List[str]:
    missing = []
    for f in FORM_FIELDS:
        if str(getattr(form, f, "") or "").strip() == "":
            missing.append(f)
    return missing


class CommandHandler:
    """Turns form submits and deletes into store calls.

    The modal is closed only after the store call succeeds; on failure it
    stays open so the user can retry or cancel.
    """

    def __init__(self, state: AppState, store: ReservationStore):
        self.state = state
        self.store = store

    def submit(self, form: ReservationForm) -> Dict[str, Any]:
        modal = self.state.modal
        modal.form = form

        missing = missing_fields(form)
        if missing:
            labels = ", ".join(FIELD_LABELS[f] for f in missing)
            self.store.notifier.warning(f"Please fill in: {labels}")
            return {"success": False, "reservation_id": None, "error": f"missing fields: {missing}"}

        # The only rule between the two write paths: is there an editing id?
        reservation = form.to_reservation(modal.editing_id)
        if reservation.id is not None:
            result = self.store.update(reservation)
        else:
            result = self.store.create(reservation)

        if result["success"]:
            modal.close()
            self.state.navigation.select_date(reservation.date)
        return result

    def delete(self, confirm: Callable[[], bool]) -> Dict[str, Any]:
        modal = self.state.modal
        if modal.mode != EDIT_OPEN or modal.editing_id is None:
            logger.warning("Delete requested with no reservation in edit mode")
            return {"success": False, "reservation_id": None, "error": "nothing to delete"}

        result = self.store.delete(modal.editing_id, confirm)
        if result["success"]:
            # closes both the edit form and any detail view
            modal.close()
        return result

    def edit(self, reservation_id) -> bool:
        reservation = self.store.get(reservation_id)
        if reservation is None:
            self.store.notifier.warning("That reservation no longer exists.")
            return False
        self.state.modal.open_edit(reservation)
        return True

    def show_detail(self, reservation_id) -> bool:
        reservation = self.store.get(reservation_id)
        if reservation is None:
            self.store.notifier.warning("That reservation no longer exists.")
            return False
        self.state.modal.open_detail(reservation)
        return True

    def new(self, date_key=None, slot=None) -> None:
        self.state.modal.open_create(date_key, slot)

    def cancel(self) -> None:
        self.state.modal.close()
