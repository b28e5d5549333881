import pytest
from erp_engine.money import (
    round_half_up, round_cents, format_currency, format_percent, format_compact_currency,
)
from erp_engine.models import InventoryConfig, DepositImpactInput
from config.settings import AppSettings, get_settings


def test_round_half_up_matches_js_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.4999) == 2


def test_round_cents():
    assert round_cents(0.125) == 0.13
    assert round_cents(89.0) == 89
    assert round_cents(12.344) == 12.34


def test_formatters():
    assert format_currency(1234.4) == "$1,234"
    assert format_currency(-500) == "-$500"
    assert format_percent(0.1234) == "12.3%"
    assert format_compact_currency(1_250_000) == "$1.25M"
    assert format_compact_currency(250_000) == "$250K"
    assert format_compact_currency(900) == "$900"


def test_with_overrides_is_field_by_field():
    cfg = InventoryConfig().with_overrides(moq=500)
    assert cfg.moq == 500
    assert cfg.lead_time_days == 90
    assert InventoryConfig().moq == 1000

    dep = DepositImpactInput().with_overrides(deposit_amount=100, pre_order_count=10)
    assert dep.full_price == 1000
    assert dep.conversion_rate == 0.85


def test_settings_defaults(monkeypatch):
    for name in ("ERP_LOG_LEVEL", "ERP_PROJECTION_YEARS", "ERP_START_YEAR", "STREAMLIT_RUNTIME_ENV"):
        monkeypatch.delenv(name, raising=False)
    assert get_settings() == AppSettings()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ERP_LOG_LEVEL", "debug")
    monkeypatch.setenv("ERP_PROJECTION_YEARS", "6")
    monkeypatch.setenv("ERP_START_YEAR", "2027")
    monkeypatch.setenv("STREAMLIT_RUNTIME_ENV", "cloud")
    s = get_settings()
    assert s.log_level == "DEBUG"
    assert s.projection_years == 6
    assert s.start_year == 2027
    assert s.runtime_env == "cloud"


def test_settings_rejects_bad_integer(monkeypatch):
    monkeypatch.setenv("ERP_PROJECTION_YEARS", "ten")
    with pytest.raises(ValueError, match="ERP_PROJECTION_YEARS must be an integer"):
        get_settings()
