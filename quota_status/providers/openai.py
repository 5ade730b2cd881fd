import base64
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any

from .. import config
from ..errors import TokenExpiredError
from ..formatter import format_window
from ..i18n import t
from ..models import AuthData, NoQuotaData, NormalizedUsage, OAuthAuth, UsageInfo
from ..normalize import (
    QuotaCounts,
    from_epoch_seconds,
    normalize,
    window_reset,
)
from .base import BaseProvider, require_dict

logger = logging.getLogger(__name__)

AUTH_ENTRY_NAME = "openai"
PROFILE_CLAIM = "https://api.openai.com/profile"

# Window lengths used when the response omits limit_window_seconds.
PRIMARY_WINDOW_SECONDS = 5 * 3600
SECONDARY_WINDOW_SECONDS = 7 * 86400


def email_from_access_token(token: str) -> str | None:
    """Read the account email from the JWT payload without verifying it."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except ValueError as e:
        logger.debug("Could not decode OpenAI access token payload: %s", e)
        return None
    if not isinstance(claims, dict):
        return None
    profile = claims.get(PROFILE_CLAIM) or {}
    return profile.get("email") or claims.get("email")


class OpenAIProvider(BaseProvider):
    """ChatGPT (Codex) plan usage provider, authenticated with OAuth tokens."""

    API_URL = "https://chatgpt.com/backend-api/wham/usage"
    auth_type = OAuthAuth

    @property
    def name(self) -> str:
        return "openai"

    @property
    def display_name(self) -> str:
        return "OpenAI"

    def load_credential(self) -> AuthData | None:
        return config.load_oauth(AUTH_ENTRY_NAME)

    def config_required_message(self) -> str:
        return t(
            "openai_config_required",
            path=config.credential_path(config.OPENCODE_AUTH_FILE),
        )

    def authenticate(self) -> None:
        super().authenticate()
        # Refreshing would take a second request; report expiry instead.
        expires = self._credential.expires
        if expires and expires <= time.time() * 1000:
            raise TokenExpiredError(self.display_name)

    def identity(self) -> str:
        return email_from_access_token(self._credential.access) or super().identity()

    def _parse_window(
        self,
        window: dict,
        label_key: str,
        default_seconds: int,
        plan_label: str | None,
        now: datetime,
    ) -> NormalizedUsage | NoQuotaData:
        """Parse one rate-limit window.

        Accepts both the current shape
        ``{"used_percent", "limit_window_seconds", "reset_at", "reset_after_seconds"}``
        and the older ``{"used_percent", "reset_timestamp"}``.
        """
        reset_at = from_epoch_seconds(window.get("reset_at") or window.get("reset_timestamp"))
        if reset_at is None:
            reset_at = window_reset(now, window.get("reset_after_seconds"))

        seconds = window.get("limit_window_seconds") or default_seconds

        counts = QuotaCounts(
            usage_percent=window.get("used_percent"),
            reset_at=reset_at,
            plan_label=plan_label,
            label=t(label_key, window=format_window(seconds, "second")),
        )
        return normalize(counts, now)

    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Parse wham/usage response into standardized UsageInfo."""
        raw_data = require_dict(self.display_name, raw_data)
        if now is None:
            now = datetime.now(timezone.utc)

        plan_type = raw_data.get("plan_type")
        plan_label = plan_type.title() if plan_type else None

        rate_limit = raw_data.get("rate_limit") or raw_data.get("rate_limits") or {}
        primary = rate_limit.get("primary_window") or rate_limit.get("primary")
        secondary = rate_limit.get("secondary_window") or rate_limit.get("secondary")

        windows = []
        if primary:
            windows.append(
                self._parse_window(
                    primary, "openai_primary_window", PRIMARY_WINDOW_SECONDS, plan_label, now
                )
            )
        if secondary:
            windows.append(
                self._parse_window(
                    secondary, "openai_secondary_window", SECONDARY_WINDOW_SECONDS, plan_label, now
                )
            )

        return UsageInfo(
            provider=self.name,
            identity=raw_data.get("email"),
            plan_label=plan_label,
            windows=windows,
            raw_response=raw_data,
        )
