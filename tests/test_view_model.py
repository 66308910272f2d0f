"""
Tests for calendar, day-schedule and side-panel derivations.
"""

from __future__ import annotations

from datetime import date

import pytest

from conftest import TODAY, make_reservation
from reservation_desk.view_model import (
    AVAILABLE,
    BOOKED,
    DAY_SLOTS,
    FIRST_WEEKDAY,
    LAST_WEEKDAY,
    ORDINARY,
    booked_summary,
    build_calendar,
    build_day_schedule,
    date_key,
    days_in_month,
    default_selected_date,
    detail_fields,
    first_weekday,
    recent_reservations,
    recent_summary,
    slot_label,
    today_reservations,
    today_summary,
)


# ---------------- CALENDAR ----------------

@pytest.mark.parametrize(
    "year, month, expected",
    [(2024, 1, 29), (2023, 1, 28), (2000, 1, 29), (1900, 1, 28), (2025, 0, 31), (2025, 3, 30), (2025, 11, 31)],
)
def test_days_in_month_is_calendar_correct(year, month, expected):
    assert days_in_month(year, month) == expected


def test_first_weekday_is_sunday_based():
    # 2025-06-01 is a Sunday, 2025-03-01 a Saturday
    assert first_weekday(2025, 5) == 0
    assert first_weekday(2025, 2) == 6
    assert first_weekday(2025, 9) == 3  # 2025-10-01 is a Wednesday


def test_calendar_has_one_cell_per_day_plus_leading_blanks():
    for year in (2023, 2024):
        for month in range(12):
            cal = build_calendar(year, month, [], today=TODAY)
            assert len(cal.cells) == days_in_month(year, month)
            assert cal.leading_blanks == first_weekday(year, month)
            assert [c.day for c in cal.cells] == list(range(1, len(cal.cells) + 1))


def test_february_leap_year_cell_counts():
    assert len(build_calendar(2024, 1, [], today=TODAY).cells) == 29
    assert len(build_calendar(2023, 1, [], today=TODAY).cells) == 28


def test_calendar_reservation_counts_match_exact_dates():
    reservations = [
        make_reservation(date="2025-03-10", time="10:00"),
        make_reservation(date="2025-03-10", time="11:00"),
        make_reservation(date="2025-03-01", time="10:00"),
        make_reservation(date="2025-04-10", time="10:00"),
    ]
    cal = build_calendar(2025, 2, reservations, today=TODAY)
    counts = {c.date_key: c.reservation_count for c in cal.cells}

    assert counts["2025-03-10"] == 2
    assert counts["2025-03-01"] == 1
    assert counts["2025-03-11"] == 0
    assert sum(counts.values()) == 3


def test_calendar_marks_today_selected_and_weekend_kinds():
    cal = build_calendar(2025, 2, [], selected_date="2025-03-15", today=TODAY)
    by_key = {c.date_key: c for c in cal.cells}

    assert by_key["2025-03-10"].is_today
    assert not by_key["2025-03-11"].is_today
    assert by_key["2025-03-15"].is_selected
    assert sum(c.is_selected for c in cal.cells) == 1

    assert by_key["2025-03-02"].kind == FIRST_WEEKDAY  # Sunday
    assert by_key["2025-03-01"].kind == LAST_WEEKDAY  # Saturday
    assert by_key["2025-03-12"].kind == ORDINARY


def test_calendar_weeks_pad_to_full_rows():
    cal = build_calendar(2025, 2, [], today=TODAY)
    weeks = cal.weeks()

    assert all(len(w) == 7 for w in weeks)
    assert weeks[0][:6] == [None] * 6
    assert weeks[0][6].day == 1


def test_date_key_zero_pads():
    assert date_key(2025, 0, 5) == "2025-01-05"
    assert date_key(2025, 11, 25) == "2025-12-25"


# ---------------- DAY SCHEDULE ----------------

def test_day_schedule_has_a_row_per_slot():
    reservations = [
        make_reservation(date="2025-03-10", time="11:00", deceased="Lee", id="1"),
        make_reservation(date="2025-03-11", time="12:00", id="2"),
    ]
    rows = build_day_schedule("2025-03-10", reservations)

    assert len(rows) == 7
    assert [r.slot for r in rows] == list(DAY_SLOTS)
    assert {r.status for r in rows} <= {AVAILABLE, BOOKED}

    booked = [r for r in rows if r.status == BOOKED]
    assert len(booked) == 1
    assert booked[0].slot == "11:00"
    assert booked[0].reservation.deceased_name == "Lee"
    assert booked[0].reservation.date == "2025-03-10"
    assert all(r.reservation is None for r in rows if r.status == AVAILABLE)


def test_day_schedule_duplicate_slot_keeps_earliest_created():
    reservations = [
        make_reservation(time="13:00", deceased="Later", id="b", created_at="2025-01-02T09:00:00"),
        make_reservation(time="13:00", deceased="First", id="a", created_at="2025-01-01T09:00:00"),
        make_reservation(time="13:00", deceased="Unknown", id="c"),
    ]
    rows = build_day_schedule("2025-03-10", reservations)
    slot = next(r for r in rows if r.slot == "13:00")

    assert slot.reservation.deceased_name == "First"


def test_slot_label_spans_to_next_hour():
    assert slot_label("10:00") == "10:00 - 11:00"
    assert slot_label("16:00") == "16:00 - 17:00"


# ---------------- TODAY / RECENT ----------------

def test_today_list_only_has_todays_entries_sorted_by_time():
    reservations = [
        make_reservation(date="2025-03-10", time="14:00", id="1"),
        make_reservation(date="2025-03-09", time="10:00", id="2"),
        make_reservation(date="2025-03-10", time="10:00", id="3"),
    ]
    todays = today_reservations(reservations, TODAY)

    assert [r.id for r in todays] == ["3", "1"]
    assert all(r.date == "2025-03-10" for r in todays)


def test_today_list_empty():
    assert today_reservations([make_reservation(date="2025-03-09")], TODAY) == []


def test_recent_list_latest_first_and_capped():
    reservations = [
        make_reservation(date="2025-03-01", time="10:00", id="1"),
        make_reservation(date="2025-03-05", time="10:00", id="2"),
        make_reservation(date="2025-03-05", time="15:00", id="3"),
        make_reservation(date="2025-02-20", time="11:00", id="4"),
        make_reservation(date="2025-04-01", time="12:00", id="5"),
        make_reservation(date="2025-01-01", time="16:00", id="6"),
    ]
    recent = recent_reservations(reservations)

    assert len(recent) == 5
    assert [r.id for r in recent] == ["5", "3", "2", "1", "4"]
    for a, b in zip(recent, recent[1:]):
        assert (a.date, a.time) >= (b.date, b.time)


def test_recent_list_does_not_reorder_input():
    reservations = [make_reservation(date="2025-03-01", id="1"), make_reservation(date="2025-03-05", id="2")]
    recent_reservations(reservations)
    assert [r.id for r in reservations] == ["1", "2"]


def test_summaries():
    r = make_reservation(date="2025-03-10", time="11:00", deceased="Lee", contractor="Kim")
    assert today_summary(r) == "[11:00] Lee (Kim)"
    assert recent_summary(r) == "[2025-03-10] Lee (Kim)"
    assert booked_summary(r) == "Booked: Lee (contractor Kim)"
    assert ("Time", "11:00 - 12:00") in detail_fields(r)


# ---------------- DEFAULT SELECTION ----------------

def test_default_selected_date_prefers_today_in_current_month():
    assert default_selected_date(2025, 2, [], TODAY) == "2025-03-10"


def test_default_selected_date_uses_first_reservation_in_month():
    reservations = [
        make_reservation(date="2025-04-03"),
        make_reservation(date="2025-05-07"),
        make_reservation(date="2025-05-20"),
    ]
    assert default_selected_date(2025, 4, reservations, TODAY) == "2025-05-07"


def test_default_selected_date_falls_back_to_first_of_month():
    assert default_selected_date(2025, 6, [make_reservation(date="2025-05-07")], TODAY) == "2025-07-01"
    assert default_selected_date(2025, 6, [], date(2026, 1, 1)) == "2025-07-01"
