"""Turn provider quota figures into :class:`NormalizedUsage`.

Providers disagree on what they report: some send a usage percentage, some
send total and used counts, some only total and remaining. The rules below
are tried in order and the first one that applies decides the result:

1. an explicit usage percentage is authoritative;
2. total and used give ``used / total * 100``;
3. total and remaining give ``used = total - remaining``;
4. otherwise the response carries no quota data.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

from pydantic import BaseModel

from .models import NoQuotaData, NormalizedUsage


class QuotaCounts(BaseModel):
    """Quota figures as extracted from a provider response, any may be missing."""
    usage_percent: float | None = None
    total: float | None = None
    used: float | None = None
    remaining: float | None = None
    reset_at: datetime | None = None
    plan_label: str | None = None
    label: str | None = None
    unit: str | None = None


def from_epoch_ms(value: float | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def from_epoch_seconds(value: float | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def parse_iso(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def percent_of(used: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return used / total * 100


def reset_eta_seconds(reset_at: datetime | None, now: datetime) -> int | None:
    """Seconds until reset, never negative."""
    if reset_at is None:
        return None
    if reset_at.tzinfo is None:
        reset_at = reset_at.replace(tzinfo=timezone.utc)
    return max(0, round((reset_at - now).total_seconds()))


def _resolve_used(counts: QuotaCounts) -> float | None:
    if counts.used is not None:
        return counts.used
    if counts.total is not None and counts.remaining is not None:
        return counts.total - counts.remaining
    return None


def _explicit_percentage(counts: QuotaCounts) -> tuple[float, float | None] | None:
    if counts.usage_percent is None:
        return None
    return counts.usage_percent, _resolve_used(counts)


def _total_and_used(counts: QuotaCounts) -> tuple[float, float | None] | None:
    if counts.total is None or counts.used is None:
        return None
    return percent_of(counts.used, counts.total), counts.used


def _total_and_remaining(counts: QuotaCounts) -> tuple[float, float | None] | None:
    if counts.total is None or counts.remaining is None:
        return None
    used = counts.total - counts.remaining
    return percent_of(used, counts.total), used


Rule = Callable[[QuotaCounts], tuple[float, float | None] | None]

# Each rule returns (usage percent, used count) or None when it does not apply.
RULES: list[Rule] = [
    _explicit_percentage,
    _total_and_used,
    _total_and_remaining,
]


def normalize(
    counts: QuotaCounts, now: datetime | None = None
) -> NormalizedUsage | NoQuotaData:
    """Apply the first matching rule; NoQuotaData if none matches."""
    if now is None:
        now = datetime.now(timezone.utc)

    for rule in RULES:
        resolved = rule(counts)
        if resolved is None:
            continue
        usage_percent, used = resolved
        return NormalizedUsage(
            total=counts.total,
            used=used,
            remaining_percent=clamp_percent(100 - usage_percent),
            reset_eta_seconds=reset_eta_seconds(counts.reset_at, now),
            plan_label=counts.plan_label,
            label=counts.label,
            unit=counts.unit,
        )

    return NoQuotaData(plan_label=counts.plan_label)


def window_reset(now: datetime, seconds: float | None) -> datetime | None:
    """Absolute reset time for providers that report a relative countdown."""
    if seconds is None:
        return None
    return now + timedelta(seconds=seconds)
