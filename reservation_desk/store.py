from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from db.models import Reservation, TABLE_NAME
from reservation_desk.notices import Notifier

logger = logging.getLogger(__name__)


def _error_message(e: Exception) -> str:
    # postgrest APIError carries message/details; network errors only str()
    error_msg = getattr(e, "message", None) or getattr(e, "details", None)
    return str(error_msg) if error_msg else str(e)


def _result(success: bool, reservation_id: Any = None, error: Optional[str] = None) -> Dict[str, Any]:
    return {"success": success, "reservation_id": reservation_id, "error": error}


class ReservationStore:
    """In-memory reservation list backed by one Supabase table.

    The list is only ever replaced by ``refresh()``; every write is followed
    by a full refresh, never by a local patch.
    """

    def __init__(self, client, notifier: Notifier, table_name: str = TABLE_NAME):
        self.client = client
        self.notifier = notifier
        self.table_name = table_name
        self._reservations: Tuple[Reservation, ...] = ()

    @property
    def reservations(self) -> Tuple[Reservation, ...]:
        return self._reservations

    def get(self, reservation_id) -> Optional[Reservation]:
        for r in self._reservations:
            if r.id == reservation_id:
                return r
        return None

    def _table(self):
        return self.client.table(self.table_name)

    # --- READ ---------------------------------------------------------------

    def refresh(self) -> bool:
        try:
            response = (
                self._table()
                .select("*")
                .order("date", desc=False)
                .order("time", desc=False)
                .execute()
            )
            rows = response.data or []
            loaded = tuple(Reservation.from_row(row) for row in rows)
        except Exception as e:
            logger.exception("Failed to load reservations: %s", _error_message(e))
            self.notifier.error("Failed to load reservations. Check the logs for details.")
            return False

        self._reservations = loaded
        logger.info("Loaded %d reservations", len(loaded))
        return True

    # --- WRITE --------------------------------------------------------------

    def create(self, reservation: Reservation) -> Dict[str, Any]:
        try:
            response = self._table().insert([reservation.to_row()]).execute()
            if not response.data:
                raise Exception("Failed to insert reservation. No data returned.")
            reservation_id = response.data[0].get("id")
        except Exception as e:
            return self._write_failed("save", e)

        logger.info("Created reservation %s", reservation_id)
        self.notifier.success("New reservation saved.")
        self.refresh()
        return _result(True, reservation_id)

    def update(self, reservation: Reservation) -> Dict[str, Any]:
        if reservation.id is None:
            raise ValueError("update() needs a reservation with an id")
        try:
            self._table().update(reservation.to_row()).eq("id", reservation.id).execute()
        except Exception as e:
            return self._write_failed("save", e)

        logger.info("Updated reservation %s", reservation.id)
        self.notifier.success("Reservation updated.")
        self.refresh()
        return _result(True, reservation.id)

    def delete(self, reservation_id, confirm: Callable[[], bool]) -> Dict[str, Any]:
        if not confirm():
            result = _result(False, reservation_id)
            result["cancelled"] = True
            return result

        try:
            self._table().delete().eq("id", reservation_id).execute()
        except Exception as e:
            return self._write_failed("delete", e)

        logger.info("Deleted reservation %s", reservation_id)
        self.notifier.success("Reservation deleted.")
        self.refresh()
        return _result(True, reservation_id)

    def _write_failed(self, action: str, e: Exception) -> Dict[str, Any]:
        error_msg = _error_message(e)
        logger.exception("Failed to %s reservation: %s", action, error_msg)
        self.notifier.error(f"Failed to {action} reservation: {error_msg}")
        return _result(False, error=error_msg)
