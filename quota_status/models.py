from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Usage percentage at or above which a warning block is appended.
HIGH_USAGE_THRESHOLD = 80

# Seconds allowed for a single provider request.
REQUEST_TIMEOUT = 10.0


class SessionCookieAuth(BaseModel):
    """Browser session cookie (MiniMax HERTZ-SESSION)."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["session"] = "session"
    session: str


class ApiKeyAuth(BaseModel):
    """Plain API key sent as a bearer token."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["api_key"] = "api_key"
    key: str


CopilotTier = Literal["free", "pro", "pro+", "business", "enterprise"]


class CopilotTokenAuth(BaseModel):
    """Fine-grained GitHub PAT with "Plan" read permission."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["copilot_token"] = "copilot_token"
    token: str
    username: str
    tier: CopilotTier


class OAuthAuth(BaseModel):
    """OAuth access/refresh pair, `expires` in epoch milliseconds."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["oauth"] = "oauth"
    access: str
    refresh: str | None = None
    expires: int | None = None


AuthData = Annotated[
    Union[SessionCookieAuth, ApiKeyAuth, CopilotTokenAuth, OAuthAuth],
    Field(discriminator="kind"),
]


class NormalizedUsage(BaseModel):
    """One quota window reduced to the shape shared by all providers."""
    total: float | None = None
    used: float | None = None
    remaining_percent: float = Field(ge=0, le=100)
    reset_eta_seconds: int | None = Field(default=None, ge=0)
    plan_label: str | None = None
    label: str | None = None
    unit: str | None = None

    @property
    def usage_percent(self) -> float:
        return 100 - self.remaining_percent


class NoQuotaData(BaseModel):
    """Provider answered but carried no interpretable quota snapshot."""
    plan_label: str | None = None


class UsageInfo(BaseModel):
    """Standardized usage information across all providers."""
    provider: str
    identity: str | None = None
    plan_label: str | None = None
    windows: list[NormalizedUsage | NoQuotaData] = []
    raw_response: dict

    @property
    def has_quota_data(self) -> bool:
        return any(isinstance(w, NormalizedUsage) for w in self.windows)


class QueryResult(BaseModel):
    """Outcome of one provider query, the only shape handed to the host."""
    success: bool
    output: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_populated(self) -> "QueryResult":
        if self.success and (not self.output or self.error):
            raise ValueError("successful result needs output and no error")
        if not self.success and (not self.error or self.output):
            raise ValueError("failed result needs error and no output")
        return self

    @classmethod
    def ok(cls, output: str) -> "QueryResult":
        return cls(success=True, output=output)

    @classmethod
    def fail(cls, error: str) -> "QueryResult":
        return cls(success=False, error=error)
