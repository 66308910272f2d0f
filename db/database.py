# db/database.py

from supabase import create_client, Client
import streamlit as st


def get_supabase_client(cfg) -> Client:
    """
    Returns a cached Supabase client.
    One client per browser session, created from the [supabase] secrets.
    """

    if "supabase_client" not in st.session_state:
        st.session_state.supabase_client = create_client(cfg.supabase.url, cfg.supabase.key)

    return st.session_state.supabase_client
