import math
from datetime import datetime, timezone

import pytest
from erp_engine.cac import (
    calculate_channel_cac, calculate_blended_cac, calculate_cac_trend, calculate_cac_by_channel,
    calculate_cac_payback, evaluate_cac_health, CACResult,
)
from erp_engine.roas import (
    calculate_channel_roas, calculate_blended_roas, calculate_roas_trend, calculate_roas_by_channel,
    evaluate_roas_health, calculate_break_even_roas, calculate_incremental_roas, rank_channels_by_roas,
)
from erp_engine.cac_alerts import (
    DEFAULT_CAC_TARGET, determine_alert_severity, check_cac_target, check_cac_targets,
    check_blended_cac_target, get_cac_status, calculate_cac_efficiency, get_cac_recommendation,
)
from erp_engine.channels import (
    ALL_CHANNELS, get_channels_by_category, get_channel_by_id, get_active_channels, allocate_budget,
)
from erp_engine.models import (
    MarketingSpend, ConversionData, RevenueAttribution, AlertSeverity, CACStatus,
    ChannelCategory, HealthRating, CACTarget,
)

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def base_spends():
    return [
        MarketingSpend("paid-search", "2025-01", 1000),
        MarketingSpend("email", "2025-01", 500),
        MarketingSpend("paid-search", "2025-02", 300),
    ]


def base_conversions():
    return [
        ConversionData("paid-search", "2025-01", 10),
        ConversionData("email", "2025-01", 5),
        ConversionData("paid-search", "2025-02", 0),
    ]


# --- CAC --------------------------------------------------------------------

def test_channel_cac():
    res = calculate_channel_cac(MarketingSpend("seo", "Q1", 1000), ConversionData("seo", "Q1", 10))
    assert res.cac == 100
    assert res.total_spend == 1000


def test_zero_customers_gives_zero_cac():
    res = calculate_channel_cac(MarketingSpend("seo", "Q1", 1000), ConversionData("seo", "Q1", 0))
    assert res.cac == 0
    assert not math.isnan(res.cac) and not math.isinf(res.cac)


def test_channel_cac_mismatch():
    with pytest.raises(ValueError, match="Channel ID mismatch"):
        calculate_channel_cac(MarketingSpend("seo", "Q1", 1), ConversionData("email", "Q1", 1))
    with pytest.raises(ValueError, match="Period mismatch"):
        calculate_channel_cac(MarketingSpend("seo", "Q1", 1), ConversionData("seo", "Q2", 1))


def test_blended_cac_sums_before_dividing():
    res = calculate_blended_cac(base_spends(), base_conversions(), "2025-01")
    assert res.channel_id == "blended"
    assert res.total_spend == 1500
    assert res.new_customers == 15
    assert res.cac == 100


def test_cac_trend():
    trend = calculate_cac_trend(base_spends(), base_conversions(), ["2025-01", "2025-02"])
    assert [r.cac for r in trend] == [100, 0]


def test_cac_by_channel_missing_conversions():
    spends = base_spends() + [MarketingSpend("video", "2025-01", 200)]
    by_channel = calculate_cac_by_channel(spends, base_conversions(), "2025-01")
    assert set(by_channel) == {"paid-search", "email", "video"}
    assert by_channel["email"].cac == 100
    assert by_channel["video"].cac == 0


def test_cac_payback_and_health():
    assert calculate_cac_payback(300, 100, 0.5) == 6
    assert calculate_cac_payback(300, 0, 0.5) == math.inf
    assert evaluate_cac_health(300, 900, 6) == HealthRating.EXCELLENT
    assert evaluate_cac_health(300, 600, 15) == HealthRating.GOOD
    assert evaluate_cac_health(300, 300, 24) == HealthRating.FAIR
    assert evaluate_cac_health(300, 150, 6) == HealthRating.POOR


# --- ROAS -------------------------------------------------------------------

def test_channel_roas():
    res = calculate_channel_roas(MarketingSpend("seo", "Q1", 1000), RevenueAttribution("seo", "Q1", 4000))
    assert res.roas == 4
    assert res.roas_percent == 400
    assert evaluate_roas_health(res.roas) == HealthRating.EXCELLENT


def test_roas_zero_spend_and_mismatch():
    res = calculate_channel_roas(MarketingSpend("seo", "Q1", 0), RevenueAttribution("seo", "Q1", 500))
    assert res.roas == 0
    with pytest.raises(ValueError, match="Channel ID mismatch between spend and attribution"):
        calculate_channel_roas(MarketingSpend("seo", "Q1", 1), RevenueAttribution("blog", "Q1", 1))


def test_blended_roas_and_ranking():
    attributions = [
        RevenueAttribution("paid-search", "2025-01", 2000),
        RevenueAttribution("email", "2025-01", 2500),
    ]
    blended = calculate_blended_roas(base_spends(), attributions, "2025-01")
    assert blended.roas == 3
    assert len(calculate_roas_trend(base_spends(), attributions, ["2025-01", "2025-02"])) == 2

    by_channel = calculate_roas_by_channel(base_spends(), attributions, "2025-01")
    assert by_channel["email"].roas == 5
    assert rank_channels_by_roas(by_channel) == ["email", "paid-search"]


def test_roas_health_bands():
    assert evaluate_roas_health(2) == HealthRating.GOOD
    assert evaluate_roas_health(1) == HealthRating.FAIR
    assert evaluate_roas_health(0.5) == HealthRating.POOR


def test_break_even_and_incremental_roas():
    assert calculate_break_even_roas(0.5) == 2
    assert calculate_break_even_roas(0) == math.inf
    assert calculate_incremental_roas(1000, 3000) == 3
    assert calculate_incremental_roas(0, 3000) == 0


# --- Alerts -----------------------------------------------------------------

def test_email_over_channel_target_is_critical():
    alert = check_cac_target(CACResult("email", "2025-01", 800, 10, 80), now=NOW)
    assert alert.severity == AlertSeverity.CRITICAL
    assert alert.target_cac == 50
    assert abs(alert.percent_over_target - 60) < 1e-9
    assert alert.message == "CRITICAL: CAC for email is 60.0% over target!"
    assert alert.id == "cac-alert-email-2025-01-1735689600000"
    assert alert.timestamp == NOW


def test_severity_bands():
    target = DEFAULT_CAC_TARGET
    assert determine_alert_severity(110, 100, target) == AlertSeverity.INFO
    assert determine_alert_severity(120, 100, target) == AlertSeverity.WARNING
    assert determine_alert_severity(140, 100, target) == AlertSeverity.CRITICAL
    assert determine_alert_severity(100, 100, target) is None
    assert determine_alert_severity(90, 100, target) is None
    assert determine_alert_severity(90, 0, target) is None


def test_zero_thresholds_still_need_cac_over_target():
    target = CACTarget(target_cac=100, warning_threshold=0, critical_threshold=0)
    assert determine_alert_severity(100, 100, target) is None
    assert check_cac_target(CACResult("foo", "p", 1000, 10, 100.0), target, now=NOW) is None

    alert = check_cac_target(CACResult("foo", "p", 1010, 10, 101.0), target, now=NOW)
    assert alert.severity == AlertSeverity.CRITICAL


def test_default_channel_targets_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CAC_TARGET.channel_targets["email"] = 1
    assert DEFAULT_CAC_TARGET.channel_targets["email"] == 50


def test_alert_messages():
    info = check_cac_target(CACResult("foo", "p", 0, 0, 110), now=NOW)
    assert info.message == "CAC for foo is slightly above target"
    warning = check_cac_target(CACResult("foo", "p", 0, 0, 120), now=NOW)
    assert warning.message == "CAC for foo exceeds target by 20.0%"


def test_no_alert_without_customers_or_under_target():
    assert check_cac_target(CACResult("email", "p", 500, 0, 0)) is None
    assert check_cac_target(CACResult("email", "p", 400, 10, 40)) is None


def test_batch_sorted_by_severity():
    results = [
        CACResult("a", "p", 0, 1, 110),     # info
        CACResult("b", "p", 0, 1, 200),     # critical
        CACResult("c", "p", 0, 1, 50),      # none
        CACResult("d", "p", 0, 1, 120),     # warning
        CACResult("e", "p", 0, 1, 150),     # critical
    ]
    alerts = check_cac_targets(results, now=NOW)
    assert [a.channel_id for a in alerts] == ["b", "e", "d", "a"]


def test_blended_check_ignores_channel_targets():
    target = CACTarget(channel_targets={"blended": 500})
    alert = check_blended_cac_target(CACResult("blended", "p", 0, 1, 110), target, now=NOW)
    assert alert.target_cac == 100
    with pytest.raises(ValueError, match="Expected blended CAC result"):
        check_blended_cac_target(CACResult("email", "p", 0, 1, 110))


def test_cac_status_efficiency_recommendation():
    assert get_cac_status(90, 100) == CACStatus.UNDER
    assert get_cac_status(100, 100) == CACStatus.AT
    assert get_cac_status(120, 100) == CACStatus.OVER
    assert get_cac_status(140, 100) == CACStatus.CRITICAL

    assert calculate_cac_efficiency(100, 100) == 50
    assert calculate_cac_efficiency(75, 100) == 75
    assert calculate_cac_efficiency(50, 100) == 100
    assert calculate_cac_efficiency(150, 100) == 0
    assert calculate_cac_efficiency(0, 100) == 100
    assert calculate_cac_efficiency(50, 0) == 0

    assert get_cac_recommendation(90, 100, "seo").startswith("seo is performing well")
    assert "requires immediate attention" in get_cac_recommendation(200, 100, "seo")


# --- Channels ---------------------------------------------------------------

def test_channel_catalog():
    assert len(ALL_CHANNELS) == 15
    assert len(get_channels_by_category(ChannelCategory.DIGITAL)) == 5
    assert len(get_channels_by_category(ChannelCategory.CONTENT)) == 4
    assert get_channel_by_id("email").name == "Email Marketing"
    assert get_channel_by_id("carrier-pigeon") is None
    assert len(get_active_channels()) == 15
    # every channel has a CAC target
    assert all(ch.id in DEFAULT_CAC_TARGET.channel_targets for ch in ALL_CHANNELS)


def test_allocate_budget():
    budgets = allocate_budget(10000)
    assert len(budgets) == 15
    assert abs(sum(b.budget for b in budgets) - 10000) < 1e-6
    by_id = {b.channel: b for b in budgets}
    assert abs(by_id["paid-search"].budget - 900) < 1e-9
    assert abs(by_id["events"].percentage - 25 / 3) < 1e-9
