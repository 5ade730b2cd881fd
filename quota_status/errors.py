"""Exceptions raised while querying a provider.

All of them are caught by :meth:`BaseProvider.query` and turned into a failed
:class:`~quota_status.models.QueryResult`.
"""

from .i18n import t
from .models import REQUEST_TIMEOUT


class QuotaStatusError(Exception):
    """Base class for errors raised by provider adapters."""


class ConfigAbsentError(QuotaStatusError):
    """No usable credential for the provider."""


class TransportError(QuotaStatusError):
    """HTTP failure or an error code wrapped inside the provider's envelope."""

    def __init__(
        self,
        provider: str,
        status: int | None,
        detail: str,
        message: str | None = None,
    ):
        self.provider = provider
        self.status = status
        self.detail = detail
        if message is None:
            if status is None:
                message = t("request_failed", provider=provider, detail=detail)
            else:
                message = t("api_error", provider=provider, status=status, detail=detail)
        super().__init__(message)

    @classmethod
    def timeout(cls, provider: str) -> "TransportError":
        message = t("timeout", provider=provider, seconds=int(REQUEST_TIMEOUT))
        return cls(provider, None, "timeout", message=message)


class ResponseFormatError(QuotaStatusError):
    """Response body is not JSON or does not match the expected envelope."""

    def __init__(self, provider: str, detail: str):
        self.provider = provider
        super().__init__(t("invalid_response", provider=provider, detail=detail))


class TokenExpiredError(QuotaStatusError):
    """OAuth access token expired before the request was made."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(t("token_expired", provider=provider))
