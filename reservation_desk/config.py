from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import streamlit as st

from db.models import TABLE_NAME


class ConfigError(Exception):
    pass


# ---------------------- DATA CLASSES ----------------------

@dataclass
class SupabaseConfig:
    url: str
    key: str  # anon key is enough when RLS allows the desk role to write


@dataclass
class AppConfig:
    supabase: SupabaseConfig
    table_name: str = TABLE_NAME
    log_level: str = "INFO"


# ---------------------- LOADING ----------------------

def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Supabase ---
    # Checks for key first, then falls back to anon_key / service_key
    try:
        supabase_secrets = secrets.get("supabase") or {}
    except FileNotFoundError as e:
        raise ConfigError("No secrets.toml found for this app.") from e

    url = supabase_secrets.get("url")
    key = (
        supabase_secrets.get("key")
        or supabase_secrets.get("anon_key")
        or supabase_secrets.get("service_key")
    )
    if not url or not key:
        raise ConfigError(
            "Supabase is not configured. Add [supabase] url and key to .streamlit/secrets.toml."
        )

    supabase_cfg = SupabaseConfig(url=url, key=key)

    # --- App (optional) ---
    app_secrets = secrets.get("app") or {}

    return AppConfig(
        supabase=supabase_cfg,
        table_name=app_secrets.get("table_name", TABLE_NAME),
        log_level=str(app_secrets.get("log_level", "INFO")).upper(),
    )
