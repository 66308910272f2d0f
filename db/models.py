# db/models.py
"""
Supabase does not require ORM model classes, the record below only maps
rows of the reservations table to Python and back.

Table: reservations
- id (uuid or int, PK, generated)
- contractorName (text)
- deceasedName (text)
- date (text, YYYY-MM-DD)
- time (text, HH:MM slot start)
- staffName (text)
- created_at (timestamp, generated)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any


TABLE_NAME = "reservations"

# Form field -> table column
COLUMN_MAP = {
    "contractor_name": "contractorName",
    "deceased_name": "deceasedName",
    "date": "date",
    "time": "time",
    "staff_name": "staffName",
}


@dataclass(frozen=True)
class Reservation:
    contractor_name: str
    deceased_name: str
    date: str
    time: str
    staff_name: str
    id: Optional[Any] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Reservation":
        return cls(
            contractor_name=row.get("contractorName") or "",
            deceased_name=row.get("deceasedName") or "",
            date=str(row.get("date") or ""),
            time=str(row.get("time") or ""),
            staff_name=row.get("staffName") or "",
            id=row.get("id"),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        # id and created_at are assigned by the database
        return {column: getattr(self, field) for field, column in COLUMN_MAP.items()}

    def to_payload(self) -> Dict[str, Any]:
        payload = {field: getattr(self, field) for field in COLUMN_MAP}
        if self.id is not None:
            payload["id"] = self.id
        return payload
