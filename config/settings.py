from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppSettings:
    log_level: str = "INFO"
    projection_years: int = 10
    start_year: int = 2025
    runtime_env: str = "local"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> AppSettings:
    return AppSettings(
        log_level=os.getenv("ERP_LOG_LEVEL", "INFO").upper(),
        projection_years=_int_env("ERP_PROJECTION_YEARS", 10),
        start_year=_int_env("ERP_START_YEAR", 2025),
        runtime_env=os.getenv("STREAMLIT_RUNTIME_ENV", "local"),
    )
