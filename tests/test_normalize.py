from datetime import datetime, timedelta, timezone

import pytest

from quota_status.models import NoQuotaData, NormalizedUsage
from quota_status.normalize import (
    QuotaCounts,
    from_epoch_ms,
    from_epoch_seconds,
    normalize,
    parse_iso,
    reset_eta_seconds,
)


@pytest.mark.parametrize(
    "used,total,expected",
    [
        (0, 100, 100),
        (85, 100, 15),
        (1, 3, 100 - 100 / 3),
        (100, 100, 0),
        (150, 100, 0),
    ],
)
def test_remaining_from_total_and_used(used, total, expected, now):
    result = normalize(QuotaCounts(total=total, used=used), now)
    assert result.remaining_percent == pytest.approx(expected)
    assert 0 <= result.remaining_percent <= 100


def test_zero_total_counts_as_unused(now):
    result = normalize(QuotaCounts(total=0, used=0), now)
    assert result.remaining_percent == 100


def test_explicit_percentage_wins_over_counts(now):
    result = normalize(QuotaCounts(usage_percent=30, total=100, used=90), now)
    assert result.remaining_percent == 70
    assert result.usage_percent == 30
    assert result.used == 90


def test_explicit_percentage_without_counts(now):
    result = normalize(QuotaCounts(usage_percent=120), now)
    assert isinstance(result, NormalizedUsage)
    assert result.remaining_percent == 0
    assert result.total is None
    assert result.used is None


def test_used_derived_from_remaining(now):
    result = normalize(QuotaCounts(total=40, remaining=10), now)
    assert result.used == 30
    assert result.remaining_percent == pytest.approx(25)


def test_explicit_used_preferred_over_remaining(now):
    result = normalize(QuotaCounts(total=40, used=5, remaining=10), now)
    assert result.used == 5


@pytest.mark.parametrize(
    "counts",
    [
        QuotaCounts(),
        QuotaCounts(total=100),
        QuotaCounts(used=5),
        QuotaCounts(remaining=5),
    ],
)
def test_no_quota_data(counts, now):
    counts = counts.model_copy(update={"plan_label": "Plus"})
    assert normalize(counts, now) == NoQuotaData(plan_label="Plus")


def test_labels_carried_through(now):
    counts = QuotaCounts(total=10, used=1, plan_label="Max", label="5h", unit="prompts")
    result = normalize(counts, now)
    assert (result.plan_label, result.label, result.unit) == ("Max", "5h", "prompts")


def test_reset_eta(now):
    assert reset_eta_seconds(None, now) is None
    assert reset_eta_seconds(now + timedelta(hours=1), now) == 3600
    assert reset_eta_seconds(now - timedelta(seconds=1), now) == 0
    assert reset_eta_seconds(now, now) == 0
    # naive timestamps are taken as UTC
    assert reset_eta_seconds(datetime(2026, 1, 30, 13, 0, 0), now) == 3600


def test_normalize_reset(now):
    later = normalize(QuotaCounts(total=1, used=0, reset_at=now + timedelta(minutes=2)), now)
    assert later.reset_eta_seconds == 120

    stale = normalize(QuotaCounts(total=1, used=0, reset_at=now - timedelta(days=1)), now)
    assert stale.reset_eta_seconds == 0


def test_timestamp_helpers():
    expected = datetime(2026, 1, 30, 12, 42, 14, 422000, tzinfo=timezone.utc)
    assert from_epoch_ms(1769776934422) == expected
    assert from_epoch_seconds(1769776934.422) == expected
    assert parse_iso("2026-01-30T12:42:14.422Z") == expected
    assert from_epoch_ms(None) is None
    assert from_epoch_ms(0) is None
    assert from_epoch_seconds(None) is None
    assert parse_iso("") is None
