"""MiniMax Coding Plan quota provider.

The quota endpoint only accepts the web console's ``HERTZ-SESSION`` cookie,
not an API key. Users copy the cookie into
``~/.config/opencode/minimax-session.json``::

    {"session": "MTc3MTA2NDA0Nnx..."}
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from .. import config
from ..errors import ResponseFormatError, TransportError
from ..i18n import t
from ..models import AuthData, SessionCookieAuth, UsageInfo
from ..normalize import QuotaCounts, from_epoch_ms, normalize
from .base import BaseProvider


class BaseResp(BaseModel):
    status_code: int
    status_msg: str | None = None


class RemainsData(BaseModel):
    """Payload of /coding_plan/remains; every field is optional on the wire."""
    plan_name: str | None = None
    total_prompts: float | None = None
    used_prompts: float | None = None
    remaining_prompts: float | None = None
    # Next reset of the rolling 5h window, epoch milliseconds.
    next_reset_time: float | None = None
    usage_percentage: float | None = None


class RemainsResponse(BaseModel):
    base_resp: BaseResp
    data: RemainsData | None = None


class MiniMaxProvider(BaseProvider):
    """MiniMax Coding Plan usage provider."""

    API_URL = "https://platform.minimaxi.io/v1/api/openplatform/coding_plan/remains"
    auth_type = SessionCookieAuth

    @property
    def name(self) -> str:
        return "minimax"

    @property
    def display_name(self) -> str:
        return "MiniMax"

    def load_credential(self) -> AuthData | None:
        return config.load_minimax_session()

    def config_required_message(self) -> str:
        return t(
            "minimax_config_required",
            path=config.credential_path(config.MINIMAX_SESSION_FILE),
        )

    def _parse_envelope(self, raw_data: Any) -> RemainsResponse:
        try:
            resp = RemainsResponse.model_validate(raw_data)
        except ValidationError as e:
            raise ResponseFormatError(self.display_name, str(e)) from e

        if resp.base_resp.status_code != 0:
            raise TransportError(
                self.display_name,
                resp.base_resp.status_code,
                resp.base_resp.status_msg or t("unknown_error"),
            )
        return resp

    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Parse MiniMax response into standardized UsageInfo."""
        # Errors come back as HTTP 200 with a non-zero base_resp.status_code.
        resp = self._parse_envelope(raw_data)
        d = resp.data

        plan_label = t("plan")
        if d is not None and d.plan_name:
            plan_label = f"{plan_label} - {d.plan_name}"

        windows = []
        if d is not None:
            counts = QuotaCounts(
                usage_percent=d.usage_percentage,
                total=d.total_prompts,
                used=d.used_prompts,
                remaining=d.remaining_prompts,
                reset_at=from_epoch_ms(d.next_reset_time),
                plan_label=plan_label,
                label=t("minimax_prompt_limit"),
                unit=t("unit_prompts"),
            )
            windows.append(normalize(counts, now))

        return UsageInfo(
            provider=self.name,
            plan_label=plan_label,
            windows=windows,
            raw_response=raw_data,
        )
