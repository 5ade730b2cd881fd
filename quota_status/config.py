import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ValidationError

from .models import (
    ApiKeyAuth,
    CopilotTier,
    CopilotTokenAuth,
    OAuthAuth,
    SessionCookieAuth,
)

logger = logging.getLogger(__name__)

MINIMAX_SESSION_FILE = "minimax-session.json"
COPILOT_QUOTA_FILE = "copilot-quota-token.json"
OPENCODE_AUTH_FILE = "auth.json"


class MiniMaxSessionConfig(BaseModel):
    """Contents of minimax-session.json."""
    session: str


class CopilotQuotaConfig(BaseModel):
    """Contents of copilot-quota-token.json."""
    token: str
    username: str
    tier: CopilotTier


class AuthEntry(BaseModel):
    """One provider entry of the OpenCode auth.json store."""
    type: str
    key: str | None = None
    access: str | None = None
    refresh: str | None = None
    expires: int | None = None


def config_dir() -> Path:
    """Directory holding credential files.

    Defaults to ~/.config/opencode, overridable with QUOTA_STATUS_CONFIG_DIR.
    """
    if env_value := os.environ.get("QUOTA_STATUS_CONFIG_DIR"):
        return Path(env_value).expanduser()
    return Path.home() / ".config" / "opencode"


def credential_path(filename: str) -> Path:
    return config_dir() / filename


def _read_json(path: Path) -> Any:
    """Read a JSON file, returning None if it is missing or malformed."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Credential file not found: %s", path)
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable credential file %s: %s", path, e)
    return None


def load_minimax_session() -> SessionCookieAuth | None:
    """Load the MiniMax HERTZ-SESSION cookie."""
    data = _read_json(credential_path(MINIMAX_SESSION_FILE))
    try:
        config = MiniMaxSessionConfig.model_validate(data)
    except ValidationError:
        return None
    if not config.session:
        return None
    return SessionCookieAuth(session=config.session)


def load_copilot_token() -> CopilotTokenAuth | None:
    """Load the Copilot quota PAT, username and tier."""
    data = _read_json(credential_path(COPILOT_QUOTA_FILE))
    try:
        config = CopilotQuotaConfig.model_validate(data)
    except ValidationError:
        return None
    if not config.token or not config.username:
        return None
    return CopilotTokenAuth(
        token=config.token, username=config.username, tier=config.tier
    )


def load_auth_entries() -> Dict[str, AuthEntry]:
    """Load the OpenCode auth.json store, skipping entries that don't parse."""
    data = _read_json(credential_path(OPENCODE_AUTH_FILE))
    if not isinstance(data, dict):
        return {}

    entries = {}
    for name, raw in data.items():
        try:
            entries[name] = AuthEntry.model_validate(raw)
        except ValidationError:
            logger.debug("Skipping malformed auth entry %r", name)
    return entries


def load_api_key(*names: str) -> ApiKeyAuth | None:
    """Return the first API key stored under any of the given auth.json names."""
    entries = load_auth_entries()
    for name in names:
        entry = entries.get(name)
        if entry is not None and entry.key:
            return ApiKeyAuth(key=entry.key)
    return None


def load_oauth(name: str) -> OAuthAuth | None:
    """Return the OAuth triple stored under the given auth.json name."""
    entry = load_auth_entries().get(name)
    if entry is None or entry.type != "oauth" or not entry.access:
        return None
    return OAuthAuth(access=entry.access, refresh=entry.refresh, expires=entry.expires)
