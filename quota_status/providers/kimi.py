from datetime import datetime
from typing import Any

from .. import config
from ..formatter import format_window
from ..i18n import t
from ..models import ApiKeyAuth, AuthData, NoQuotaData, NormalizedUsage, UsageInfo
from ..normalize import QuotaCounts, normalize, parse_iso
from .base import BaseProvider, require_dict

AUTH_ENTRY_NAME = "kimi-for-coding"


def _to_number(value: Any) -> float | None:
    """Kimi sends counts as strings; missing or garbled values become None."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class KimiProvider(BaseProvider):
    """Kimi Coding Plan usage provider."""

    API_URL = "https://api.kimi.com/coding/v1/usages"
    auth_type = ApiKeyAuth

    @property
    def name(self) -> str:
        return "kimi"

    @property
    def display_name(self) -> str:
        return "Kimi"

    def load_credential(self) -> AuthData | None:
        return config.load_api_key(AUTH_ENTRY_NAME)

    def config_required_message(self) -> str:
        return t(
            "kimi_config_required",
            path=config.credential_path(config.OPENCODE_AUTH_FILE),
        )

    def _parse_time_unit(self, time_unit: str) -> str:
        """TIME_UNIT_MINUTE -> minute."""
        return time_unit.replace("TIME_UNIT_", "").lower()

    def _parse_detail(
        self,
        detail: dict,
        label: str,
        plan_label: str | None,
        now: datetime | None,
    ) -> NormalizedUsage | NoQuotaData:
        counts = QuotaCounts(
            total=_to_number(detail.get("limit")),
            used=_to_number(detail.get("used")),
            remaining=_to_number(detail.get("remaining")),
            reset_at=parse_iso(detail.get("resetTime")),
            plan_label=plan_label,
            label=label,
        )
        return normalize(counts, now)

    def _parse_plan(self, user: dict) -> str | None:
        level = (user.get("membership") or {}).get("level")
        if not level:
            return None
        return level.replace("LEVEL_", "").title()

    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Parse Kimi response into standardized UsageInfo."""
        raw_data = require_dict(self.display_name, raw_data)
        user = raw_data.get("user") or {}
        plan_label = self._parse_plan(user)

        windows = []
        if usage := raw_data.get("usage"):
            windows.append(
                self._parse_detail(usage, t("kimi_weekly_limit"), plan_label, now)
            )

        for limit in raw_data.get("limits") or []:
            if not isinstance(limit, dict):
                continue
            window = limit.get("window") or {}
            label = t(
                "kimi_window_limit",
                window=format_window(
                    window.get("duration") or 0,
                    self._parse_time_unit(window.get("timeUnit") or ""),
                ),
            )
            windows.append(
                self._parse_detail(limit.get("detail") or {}, label, plan_label, now)
            )

        return UsageInfo(
            provider=self.name,
            identity=user.get("userId") or None,
            plan_label=plan_label,
            windows=windows,
            raw_response=raw_data,
        )
