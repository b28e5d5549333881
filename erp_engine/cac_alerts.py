"""CAC targets and over-target alerting"""
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, List, Optional

from config.default_params import DEFAULT_CAC_TARGET as _DEFAULT_CAC_TARGET
from .models import AlertSeverity, CACStatus, CACTarget
from .cac import BLENDED, CACResult
from .money import round_half_up

DEFAULT_CAC_TARGET = CACTarget(
    channel_targets=MappingProxyType(dict(_DEFAULT_CAC_TARGET['channel_targets'])),
)

SEVERITY_ORDER = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


@dataclass(frozen=True)
class CACAlert:
    id: str
    channel_id: str
    period: str
    severity: AlertSeverity
    message: str
    current_cac: float
    target_cac: float
    percent_over_target: float   # percent points, e.g. 60.0
    timestamp: datetime


def _alert_id(channel_id: str, period: str, now: datetime) -> str:
    return f"cac-alert-{channel_id}-{period}-{int(now.timestamp() * 1000)}"


def determine_alert_severity(
    current_cac: float,
    target_cac: float,
    target: CACTarget = DEFAULT_CAC_TARGET,
) -> Optional[AlertSeverity]:
    """Severity of an over-target CAC, or None when at or under target"""
    if target_cac <= 0 or current_cac <= target_cac:
        return None

    percent_over = (current_cac - target_cac) / target_cac
    if percent_over >= target.critical_threshold:
        return AlertSeverity.CRITICAL
    if percent_over >= target.warning_threshold:
        return AlertSeverity.WARNING
    return AlertSeverity.INFO


def _message(severity: AlertSeverity, channel_id: str, percent_over: float) -> str:
    if severity == AlertSeverity.CRITICAL:
        return f"CRITICAL: CAC for {channel_id} is {percent_over:.1f}% over target!"
    if severity == AlertSeverity.WARNING:
        return f"CAC for {channel_id} exceeds target by {percent_over:.1f}%"
    if severity == AlertSeverity.INFO:
        return f"CAC for {channel_id} is slightly above target"
    raise ValueError(f"Unhandled alert severity: {severity}")


def check_cac_target(
    cac_result: CACResult,
    target: CACTarget = DEFAULT_CAC_TARGET,
    now: Optional[datetime] = None,
) -> Optional[CACAlert]:
    """
    Compare a CAC result with its target and build an alert if it is over.

    The channel-specific target wins over the global one. A CAC of 0 means
    no customers were acquired and never raises an alert.
    """
    target_cac = target.channel_targets.get(cac_result.channel_id, target.target_cac)

    if cac_result.cac <= 0:
        return None

    severity = determine_alert_severity(cac_result.cac, target_cac, target)
    if severity is None:
        return None

    now = now or datetime.now()
    percent_over = (cac_result.cac - target_cac) / target_cac * 100
    return CACAlert(
        id=_alert_id(cac_result.channel_id, cac_result.period, now),
        channel_id=cac_result.channel_id,
        period=cac_result.period,
        severity=severity,
        message=_message(severity, cac_result.channel_id, percent_over),
        current_cac=cac_result.cac,
        target_cac=target_cac,
        percent_over_target=percent_over,
        timestamp=now,
    )


def check_cac_targets(
    cac_results: Iterable[CACResult],
    target: CACTarget = DEFAULT_CAC_TARGET,
    now: Optional[datetime] = None,
) -> List[CACAlert]:
    """Alerts for a batch of results, critical first"""
    alerts = [check_cac_target(r, target, now) for r in cac_results]
    alerts = [a for a in alerts if a is not None]
    return sorted(alerts, key=lambda a: SEVERITY_ORDER[a.severity])


def check_blended_cac_target(
    cac_result: CACResult,
    target: CACTarget = DEFAULT_CAC_TARGET,
    now: Optional[datetime] = None,
) -> Optional[CACAlert]:
    if cac_result.channel_id != BLENDED:
        raise ValueError("Expected blended CAC result")
    return check_cac_target(cac_result, target.with_overrides(channel_targets={}), now)


def get_cac_status(cac: float, target_cac: float) -> CACStatus:
    if target_cac <= 0:
        return CACStatus.CRITICAL

    ratio = cac / target_cac
    if ratio <= 0.95:
        return CACStatus.UNDER
    if ratio <= 1.05:
        return CACStatus.AT
    if ratio <= 1.30:
        return CACStatus.OVER
    return CACStatus.CRITICAL


def calculate_cac_efficiency(cac: float, target_cac: float) -> int:
    """0-100 score: 100 at half the target or better, 50 at target, 0 at 1.5x"""
    if target_cac <= 0:
        return 0
    if cac <= 0:
        return 100

    ratio = cac / target_cac
    score = max(0.0, min(100.0, 100 - (ratio - 0.5) * 100))
    return round_half_up(score)


def get_cac_recommendation(cac: float, target_cac: float, channel_id: str) -> str:
    status = get_cac_status(cac, target_cac)
    if status == CACStatus.UNDER:
        return f"{channel_id} is performing well. Consider scaling spend if ROAS remains healthy."
    if status == CACStatus.AT:
        return f"{channel_id} is at target. Monitor closely and optimize for efficiency."
    if status == CACStatus.OVER:
        return f"{channel_id} is above target. Review ad creatives, targeting, and landing pages."
    return f"{channel_id} requires immediate attention. Consider pausing or significantly restructuring."
