from __future__ import annotations

import streamlit as st

from reservation_desk.commands import CommandHandler
from reservation_desk.view_model import (
    CalendarMonth,
    FIRST_WEEKDAY,
    LAST_WEEKDAY,
    booked_summary,
    build_day_schedule,
    weekday_labels,
)


def _cell_label(cell) -> str:
    label = str(cell.day)
    if cell.is_today:
        label += " (today)"
    if cell.reservation_count:
        label += f"  ·  {cell.reservation_count} booked"
    return label


def _header_label(index: int, name: str) -> str:
    if index == 0:
        return f"**:red[{name}]**"
    if index == 6:
        return f"**:blue[{name}]**"
    return f"**{name}**"


def render_calendar(month: CalendarMonth, handler: CommandHandler):
    nav = handler.state.navigation

    header = st.columns(7)
    for i, name in enumerate(weekday_labels()):
        header[i].markdown(_header_label(i, name))

    for week in month.weeks():
        cols = st.columns(7)
        for col, cell in zip(cols, week):
            if cell is None:
                # leading/trailing blank, not clickable
                col.write("")
                continue
            col.button(
                _cell_label(cell),
                key=f"cell_{cell.date_key}",
                type="primary" if cell.is_selected else "secondary",
                help={FIRST_WEEKDAY: "Sunday", LAST_WEEKDAY: "Saturday"}.get(cell.kind),
                on_click=nav.select_date,
                args=(cell.date_key,),
                use_container_width=True,
            )


def render_day_schedule(day: str, handler: CommandHandler):
    st.subheader(f"Schedule for {day}")

    for row in build_day_schedule(day, handler.store.reservations):
        c1, c2 = st.columns([1, 3])
        c1.write(row.label)
        if row.is_booked:
            c2.button(
                booked_summary(row.reservation),
                key=f"slot_{day}_{row.slot}",
                on_click=handler.show_detail,
                args=(row.reservation.id,),
                use_container_width=True,
            )
        else:
            c2.button(
                "Available",
                key=f"slot_{day}_{row.slot}",
                on_click=handler.new,
                args=(day, row.slot),
                use_container_width=True,
            )
