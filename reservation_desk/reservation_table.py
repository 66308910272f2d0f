from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from db.models import Reservation

DISPLAY_COLS = ["date", "time", "deceasedName", "contractorName", "staffName", "id"]


def reservations_dataframe(reservations: Sequence[Reservation]) -> pd.DataFrame:
    rows = [dict(r.to_row(), id=r.id, created_at=r.created_at) for r in reservations]
    df = pd.DataFrame(rows, columns=DISPLAY_COLS + ["created_at"])
    return df.sort_values(["date", "time"], ascending=True, ignore_index=True)


def render_reservation_table(reservations: Sequence[Reservation]):
    st.subheader("All Reservations")

    df = reservations_dataframe(reservations)
    if df.empty:
        st.info("No reservations found in the database.")
        return

    # --- KPI Metrics ---
    col1, col2 = st.columns(2)
    col1.metric("Total Reservations", len(df))
    col2.metric("Days Booked", df["date"].nunique())

    # --- Filters ---
    staff_filter = st.multiselect(
        "Filter by Staff",
        options=sorted(df["staffName"].unique()),
    )
    if staff_filter:
        filtered_df = df[df["staffName"].isin(staff_filter)]
    else:
        filtered_df = df

    st.dataframe(filtered_df[DISPLAY_COLS], use_container_width=True, hide_index=True)

    # --- Export ---
    csv = filtered_df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "📥 Download as CSV",
        csv,
        "reservations.csv",
        "text/csv",
        key="download-csv",
    )
