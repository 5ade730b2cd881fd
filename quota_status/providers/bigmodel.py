from datetime import datetime
from typing import Any

from .. import config
from ..errors import TransportError
from ..formatter import format_window
from ..i18n import t
from ..models import ApiKeyAuth, AuthData, NoQuotaData, NormalizedUsage, UsageInfo
from ..normalize import QuotaCounts, from_epoch_ms, normalize
from .base import BaseProvider, require_dict

AUTH_ENTRY_NAMES = ("zhipuai-coding-plan", "zai-coding-plan")


class BigModelProvider(BaseProvider):
    """智谱 BigModel Coding Plan usage provider."""

    API_URL = "https://open.bigmodel.cn/api/monitor/usage/quota/limit"
    auth_type = ApiKeyAuth

    @property
    def name(self) -> str:
        return "bigmodel"

    @property
    def display_name(self) -> str:
        return "Zhipu"

    def load_credential(self) -> AuthData | None:
        return config.load_api_key(*AUTH_ENTRY_NAMES)

    def config_required_message(self) -> str:
        return t(
            "bigmodel_config_required",
            path=config.credential_path(config.OPENCODE_AUTH_FILE),
        )

    async def fetch_usage(self) -> dict:
        raw_data = require_dict(self.display_name, await super().fetch_usage())
        # Failures are reported inside an HTTP 200 body.
        if raw_data.get("success") is False or raw_data.get("code", 200) != 200:
            raise TransportError(
                self.display_name,
                raw_data.get("code"),
                raw_data.get("msg") or t("unknown_error"),
            )
        return raw_data

    def _get_unit_name(self, unit: int) -> str:
        """Convert unit code to readable name."""
        unit_names = {
            1: "second",
            2: "minute",
            3: "hour",
            4: "day",
            5: "month",
            6: "year",
        }
        return unit_names.get(unit, f"unit_{unit}")

    def _parse_limit(
        self, limit: dict, plan_label: str | None, now: datetime | None
    ) -> NormalizedUsage | NoQuotaData:
        limit_type = limit.get("type") or ""
        # unit: 1=second, 2=minute, 3=hour, 4=day, 5=month, 6=year
        # number: the count of units (e.g., 5 hours, 1 month)
        window = format_window(
            limit.get("number") or 1, self._get_unit_name(limit.get("unit") or 0)
        )
        reset_at = from_epoch_ms(limit.get("nextResetTime"))

        if limit_type == "TIME_LIMIT":
            counts = QuotaCounts(
                usage_percent=limit.get("percentage"),
                total=limit.get("usage"),
                used=limit.get("currentValue"),
                remaining=limit.get("remaining"),
                reset_at=reset_at,
                plan_label=plan_label,
                label=t("bigmodel_mcp_limit", window=window),
                unit=t("unit_requests"),
            )
        else:
            # TOKENS_LIMIT only reports a percentage
            counts = QuotaCounts(
                usage_percent=limit.get("percentage"),
                reset_at=reset_at,
                plan_label=plan_label,
                label=t("bigmodel_token_limit", window=window),
            )
        return normalize(counts, now)

    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Parse BigModel response into standardized UsageInfo."""
        raw_data = require_dict(self.display_name, raw_data)
        data = raw_data.get("data") or {}
        level = data.get("level")
        plan_label = f"{t('plan')} - {level}" if level else t("plan")

        windows = [
            self._parse_limit(limit, plan_label, now)
            for limit in data.get("limits") or []
            if isinstance(limit, dict)
        ]

        return UsageInfo(
            provider=self.name,
            plan_label=plan_label,
            windows=windows,
            raw_response=raw_data,
        )
