import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, ClassVar

import httpx

from ..errors import ConfigAbsentError, QuotaStatusError, ResponseFormatError
from ..formatter import format_usage, mask_string
from ..models import (
    ApiKeyAuth,
    AuthData,
    CopilotTokenAuth,
    OAuthAuth,
    QueryResult,
    SessionCookieAuth,
    UsageInfo,
)
from ..transport import auth_headers, request_json

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for quota providers.

    A subclass knows where its credential lives, which endpoint to call and
    how to read the response. :meth:`query` chains those steps and is the
    only place where failures are turned into a :class:`QueryResult`.
    """

    API_URL: ClassVar[str]
    auth_type: ClassVar[type]

    def __init__(
        self,
        auth: AuthData | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.auth = auth
        self._transport = transport
        self._credential: Any = None
        self._headers: dict[str, str] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider id."""
        pass

    @property
    def display_name(self) -> str:
        return self.name

    @abstractmethod
    def load_credential(self) -> AuthData | None:
        """Read the provider secret from disk, None when absent."""
        pass

    @abstractmethod
    def config_required_message(self) -> str:
        """User-facing hint shown when no credential is configured."""
        pass

    @abstractmethod
    def parse_usage(self, raw_data: Any, now: datetime | None = None) -> UsageInfo:
        """Convert raw response to standardized UsageInfo model."""
        pass

    def authenticate(self) -> None:
        """Resolve the credential and build the request headers."""
        credential = self.auth if self.auth is not None else self.load_credential()
        if not isinstance(credential, self.auth_type):
            raise ConfigAbsentError(self.config_required_message())
        self._credential = credential
        self._headers = {
            **auth_headers(credential),
            "Content-Type": "application/json",
        }

    async def fetch_usage(self) -> Any:
        """Call provider API and return raw response data."""
        return await request_json(
            "GET",
            self.API_URL,
            provider=self.display_name,
            headers=self._headers,
            transport=self._transport,
        )

    def identity(self) -> str:
        """Masked account identity for the report header."""
        match self._credential:
            case SessionCookieAuth(session=session):
                return mask_string(session, visible=8)
            case ApiKeyAuth(key=key):
                return mask_string(key)
            case CopilotTokenAuth(username=username):
                return username
            case OAuthAuth(access=access):
                return mask_string(access)
        return "-"

    def format_usage(self, usage: UsageInfo) -> str:
        return format_usage(
            usage.windows,
            identity=usage.identity or self.identity(),
            plan_label=usage.plan_label,
        )

    async def query(self) -> QueryResult:
        """Load credential, fetch, normalize and format; never raises."""
        try:
            self.authenticate()
            raw_data = await self.fetch_usage()
            usage = self.parse_usage(raw_data)
            return QueryResult.ok(self.format_usage(usage))
        except ConfigAbsentError as e:
            logger.debug("%s: no credential configured", self.name)
            return QueryResult.fail(str(e))
        except QuotaStatusError as e:
            logger.warning("%s quota query failed: %s", self.name, e)
            return QueryResult.fail(str(e))
        except Exception as e:
            logger.warning(
                "%s quota query failed: %s: %s", self.name, type(e).__name__, e
            )
            return QueryResult.fail(str(e) or type(e).__name__)


def require_dict(provider: str, value: Any) -> dict:
    """Reject envelopes that are not JSON objects."""
    if not isinstance(value, dict):
        raise ResponseFormatError(provider, f"expected a JSON object, got {type(value).__name__}")
    return value
