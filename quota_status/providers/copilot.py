"""GitHub Copilot premium request quota.

Uses the public billing REST API, which needs a fine-grained PAT with the
"Plan" read permission. The API reports usage only; the monthly allowance
comes from the subscription tier configured next to the token.
"""

from datetime import datetime, timezone
from typing import Any

from .. import config
from ..i18n import t
from ..models import AuthData, CopilotTokenAuth, UsageInfo
from ..normalize import QuotaCounts, normalize
from ..transport import request_json
from .base import BaseProvider, require_dict

# Monthly premium request allowance per tier.
TIER_LIMITS = {
    "free": 50,
    "pro": 300,
    "pro+": 1500,
    "business": 300,
    "enterprise": 1000,
}

TIER_NAMES = {
    "free": "Free",
    "pro": "Pro",
    "pro+": "Pro+",
    "business": "Business",
    "enterprise": "Enterprise",
}


def next_month_start(now: datetime) -> datetime:
    """Allowances reset at 00:00 UTC on the first day of the month."""
    if now.month == 12:
        return datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)
    return datetime(now.year, now.month + 1, 1, tzinfo=timezone.utc)


class CopilotProvider(BaseProvider):
    """GitHub Copilot usage provider."""

    API_URL = "https://api.github.com/users/{username}/settings/billing/premium_request/usage"
    auth_type = CopilotTokenAuth

    @property
    def name(self) -> str:
        return "copilot"

    @property
    def display_name(self) -> str:
        return "GitHub Copilot"

    def load_credential(self) -> AuthData | None:
        return config.load_copilot_token()

    def config_required_message(self) -> str:
        return t(
            "copilot_config_required",
            path=config.credential_path(config.COPILOT_QUOTA_FILE),
        )

    def authenticate(self) -> None:
        super().authenticate()
        self._headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    async def fetch_usage(self) -> Any:
        return await request_json(
            "GET",
            self.API_URL.format(username=self._credential.username),
            provider=self.display_name,
            headers=self._headers,
            transport=self._transport,
        )

    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Sum Copilot premium requests for the current billing month."""
        raw_data = require_dict(self.display_name, raw_data)
        if now is None:
            now = datetime.now(timezone.utc)

        tier = self._credential.tier
        plan_label = f"Copilot {TIER_NAMES[tier]}"

        used = sum(
            item.get("grossQuantity") or 0
            for item in raw_data.get("usageItems") or []
            if isinstance(item, dict) and (item.get("product") or "").lower() == "copilot"
        )

        counts = QuotaCounts(
            total=TIER_LIMITS[tier],
            used=used,
            reset_at=next_month_start(now),
            plan_label=plan_label,
            label=t("copilot_premium_requests"),
            unit=t("unit_requests"),
        )

        return UsageInfo(
            provider=self.name,
            plan_label=plan_label,
            windows=[normalize(counts, now)],
            raw_response=raw_data,
        )
