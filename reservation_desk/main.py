from __future__ import annotations

import sys
import os
import logging
from datetime import date

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

# IMPORTS
from db.database import get_supabase_client
from reservation_desk.calendar_view import render_calendar, render_day_schedule
from reservation_desk.commands import CommandHandler
from reservation_desk.config import AppConfig, ConfigError, load_config
from reservation_desk.notices import Notifier
from reservation_desk.reservation_table import render_reservation_table
from reservation_desk.state import (
    AppState,
    CREATE_OPEN,
    DETAIL_OPEN,
    EDIT_OPEN,
    ReservationForm,
    year_options,
)
from reservation_desk.store import ReservationStore
from reservation_desk.view_model import (
    DAY_SLOTS,
    NO_RECENT_MESSAGE,
    NO_TODAY_MESSAGE,
    build_calendar,
    detail_fields,
    recent_reservations,
    recent_summary,
    today_reservations,
    today_summary,
)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # script reruns on every interaction
    root.handlers.clear()
    root.addHandler(handler)


def _init_app_state(cfg: AppConfig):
    if "notifier" not in st.session_state:
        st.session_state.notifier = Notifier()
    if "store" not in st.session_state:
        st.session_state.store = ReservationStore(
            get_supabase_client(cfg), st.session_state.notifier, table_name=cfg.table_name
        )
        st.session_state.store.refresh()
    if "app_state" not in st.session_state:
        st.session_state.app_state = AppState.initial()


def render_notices(notifier: Notifier):
    for level, message in notifier.drain():
        getattr(st, level)(message)


# --- SIDEBAR ---

def _on_year_change(handler: CommandHandler):
    handler.state.navigation.set_year(st.session_state.year_select, handler.store.reservations)


def _on_month_change(handler: CommandHandler):
    handler.state.navigation.set_month(st.session_state.month_select, handler.store.reservations)


def render_sidebar(handler: CommandHandler):
    nav = handler.state.navigation
    reservations = handler.store.reservations

    # keep pickers in sync with navigation changed elsewhere (Today, cell clicks)
    st.session_state.year_select = nav.year
    st.session_state.month_select = nav.month

    with st.sidebar:
        st.title("Navigation")
        c1, c2 = st.columns(2)
        c1.selectbox(
            "Year",
            year_options(),
            key="year_select",
            on_change=_on_year_change,
            args=(handler,),
        )
        c2.selectbox(
            "Month",
            list(range(12)),
            format_func=lambda m: MONTH_NAMES[m],
            key="month_select",
            on_change=_on_month_change,
            args=(handler,),
        )
        st.button("Today", on_click=nav.go_to_today, use_container_width=True)
        st.button(
            "➕ New Reservation",
            on_click=handler.new,
            args=(nav.selected_date,),
            type="primary",
            use_container_width=True,
        )
        st.button("🔄 Reload", on_click=handler.store.refresh, use_container_width=True)

        st.divider()
        st.subheader("Today's Reservations")
        todays = today_reservations(reservations)
        if not todays:
            st.caption(NO_TODAY_MESSAGE)
        for r in todays:
            st.button(today_summary(r), key=f"today_{r.id}", on_click=handler.show_detail, args=(r.id,))

        st.subheader("Recent Reservations")
        recent = recent_reservations(reservations)
        if not recent:
            st.caption(NO_RECENT_MESSAGE)
        for r in recent:
            st.button(recent_summary(r), key=f"recent_{r.id}", on_click=handler.show_detail, args=(r.id,))


# --- PANELS (create / edit / detail) ---

def render_form_panel(handler: CommandHandler):
    modal = handler.state.modal
    form = modal.form
    editing = modal.mode == EDIT_OPEN

    with st.container(border=True):
        st.subheader("Edit Reservation" if editing else "New Reservation")

        with st.form(key=f"reservation_form_{modal.editing_id or 'new'}_{form.date}_{form.time}"):
            contractor = st.text_input("Contractor name", value=form.contractor_name)
            deceased = st.text_input("Deceased name", value=form.deceased_name)
            picked_date = st.date_input(
                "Date",
                value=date.fromisoformat(form.date) if form.date else None,
            )
            picked_time = st.selectbox(
                "Time",
                DAY_SLOTS,
                index=DAY_SLOTS.index(form.time) if form.time in DAY_SLOTS else None,
            )
            staff = st.text_input("Staff name", value=form.staff_name)

            c1, c2 = st.columns(2)
            submitted = c1.form_submit_button("Save", type="primary")
            cancelled = c2.form_submit_button("Cancel")

        if cancelled:
            handler.cancel()
            st.rerun()

        if submitted:
            handler.submit(
                ReservationForm(
                    contractor_name=contractor,
                    deceased_name=deceased,
                    date=picked_date.isoformat() if picked_date else "",
                    time=picked_time or "",
                    staff_name=staff,
                )
            )
            # failed writes keep the panel open; notices show on the rerun
            st.rerun()

        if editing:
            confirm_key = f"confirm_delete_{modal.editing_id}"
            st.checkbox("Yes, delete this reservation", key=confirm_key)
            st.button(
                "🗑️ Delete",
                on_click=handler.delete,
                args=(lambda: st.session_state.get(confirm_key, False),),
            )


def render_detail_panel(handler: CommandHandler):
    modal = handler.state.modal
    reservation = handler.store.get(modal.detail_id)
    if reservation is None:
        handler.cancel()
        return

    with st.container(border=True):
        st.subheader("Reservation Details")
        for label, value in detail_fields(reservation):
            st.markdown(f"**{label}:** {value}")

        c1, c2 = st.columns(2)
        c1.button("Edit", on_click=handler.edit, args=(reservation.id,), type="primary")
        c2.button("Close", on_click=handler.cancel)


def main():
    st.set_page_config(
        page_title="Funeral Reservation Desk",
        page_icon="🕯️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    try:
        cfg = load_config()
    except ConfigError as e:
        st.error(str(e))
        st.stop()

    configure_logging(cfg.log_level)
    _init_app_state(cfg)

    state: AppState = st.session_state.app_state
    store: ReservationStore = st.session_state.store
    handler = CommandHandler(state, store)

    nav = state.navigation
    nav.ensure_selection(store.reservations)

    render_sidebar(handler)

    st.title("🕯️ Funeral Reservation Desk")
    render_notices(store.notifier)

    calendar_tab, table_tab = st.tabs(["Calendar", "All Reservations"])

    with calendar_tab:
        left, right = st.columns([3, 2])
        with left:
            st.subheader(f"{MONTH_NAMES[nav.month]} {nav.year}")
            month = build_calendar(nav.year, nav.month, store.reservations, nav.selected_date)
            render_calendar(month, handler)

        with right:
            if state.modal.mode in (CREATE_OPEN, EDIT_OPEN):
                render_form_panel(handler)
            elif state.modal.mode == DETAIL_OPEN:
                render_detail_panel(handler)
            render_day_schedule(nav.selected_date, handler)

    with table_tab:
        render_reservation_table(store.reservations)


if __name__ == "__main__":
    main()
