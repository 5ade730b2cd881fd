import json
from datetime import datetime, timezone

import httpx
import pytest


@pytest.fixture(autouse=True)
def english(monkeypatch):
    monkeypatch.setenv("QUOTA_STATUS_LANG", "en")


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point credential lookups at an empty temporary directory."""
    monkeypatch.setenv("QUOTA_STATUS_CONFIG_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def write_json(config_dir):
    def _write(name, data):
        path = config_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def now():
    return datetime(2026, 1, 30, 12, 0, 0, tzinfo=timezone.utc)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def recording_transport():
    """Build a transport from a request handler."""
    return RecordingTransport


@pytest.fixture
def json_transport():
    """Build a transport answering every request with the given JSON body."""

    def _build(body, status_code=200):
        return RecordingTransport(
            lambda request: httpx.Response(status_code, json=body)
        )

    return _build
