from typing import Sequence

from .i18n import t
from .models import HIGH_USAGE_THRESHOLD, NoQuotaData, NormalizedUsage

BAR_WIDTH = 20


def mask_string(value: str, visible: int = 4) -> str:
    """Keep the first and last `visible` characters of a secret."""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}****{value[-visible:]}"


def create_progress_bar(remaining_percent: float, width: int = BAR_WIDTH) -> str:
    """Render a bar whose filled part is proportional to the remaining quota."""
    percent = max(0.0, min(100.0, remaining_percent))
    filled = round(percent / 100 * width)
    return "█" * filled + "░" * (width - filled)


def format_duration(seconds: int) -> str:
    """Format a countdown compactly, e.g. 2d3h, 1h0m, 5m or 42s."""
    seconds = max(0, int(seconds))
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    if days > 0:
        return f"{days}d{hours}h"
    elif hours > 0:
        return f"{hours}h{minutes}m"
    elif minutes > 0:
        return f"{minutes}m"
    else:
        return f"{secs}s"


def _format_count(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_window(duration: int, unit: str) -> str:
    """Readable rolling-window length, e.g. (300, "minute") -> "5h"."""
    if unit == "minute" and duration % 60 == 0:
        duration, unit = duration // 60, "hour"
    if unit == "second" and duration % 3600 == 0:
        duration, unit = duration // 3600, "hour"
    if unit == "hour" and duration % 24 == 0 and duration >= 24:
        duration, unit = duration // 24, "day"
    short = {"second": "s", "minute": "m", "hour": "h", "day": "d"}
    if unit in short:
        return f"{duration}{short[unit]}"
    return f"{duration} {unit}"


def _format_usage_lines(usage: NormalizedUsage) -> list[str]:
    lines = []
    if usage.label:
        lines.append(usage.label)

    remaining = round(usage.remaining_percent)
    bar = create_progress_bar(usage.remaining_percent)
    lines.append(f"{bar} {t('remaining', percent=remaining)}")

    if usage.total is not None and usage.used is not None:
        line = t("used", used=_format_count(usage.used), total=_format_count(usage.total))
        if usage.unit:
            line += f" {usage.unit}"
        lines.append(line)

    if usage.reset_eta_seconds is not None:
        lines.append(t("reset_in", duration=format_duration(usage.reset_eta_seconds)))
    return lines


def format_usage(
    windows: Sequence[NormalizedUsage | NoQuotaData],
    identity: str,
    plan_label: str | None = None,
) -> str:
    """Render the multi-line quota report for one account."""
    lines = []
    if plan_label is None:
        plan_label = next((w.plan_label for w in windows if w.plan_label), None)
    header = f"{t('account')}        {identity}"
    if plan_label:
        header += f" ({plan_label})"
    lines.append(header)
    lines.append("")

    usages = [w for w in windows if isinstance(w, NormalizedUsage)]
    if not usages:
        lines.append(t("no_quota_data"))
        return "\n".join(lines)

    for i, usage in enumerate(usages):
        if i > 0:
            lines.append("")
        lines.extend(_format_usage_lines(usage))

    if any(u.usage_percent >= HIGH_USAGE_THRESHOLD for u in usages):
        lines.append("")
        lines.append(t("limit_reached"))

    return "\n".join(lines)
