import asyncio

import pytest

from quota_status import __main__ as cli
from quota_status.models import QueryResult
from quota_status.providers import PROVIDERS, get_provider
from quota_status.providers.minimax import MiniMaxProvider


def test_get_provider():
    assert get_provider("minimax") is MiniMaxProvider
    with pytest.raises(ValueError):
        get_provider("nope")


def test_all_providers_registered():
    assert set(PROVIDERS) == {"minimax", "bigmodel", "kimi", "openai", "copilot"}
    for name, provider_cls in PROVIDERS.items():
        assert provider_cls().name == name


def test_render_results():
    providers = [PROVIDERS["minimax"](), PROVIDERS["kimi"]()]
    results = [QueryResult.ok("report text"), QueryResult.fail("no key")]

    output = cli.render_results(providers, results)

    assert "## MiniMax" in output
    assert "report text" in output
    assert "## Kimi" in output
    assert "✗ no key" in output


@pytest.mark.asyncio
async def test_main_without_credentials_fails(config_dir, capsys):
    # Nothing is configured, so every provider fails before any request
    exit_code = await cli.main(["--provider", "minimax", "--provider", "copilot"])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "## MiniMax" in out
    assert "## GitHub Copilot" in out
    assert "minimax-session.json" in out


@pytest.mark.asyncio
async def test_main_reports_success(config_dir, capsys, monkeypatch):
    async def fake_query(self):
        return QueryResult.ok("all good")

    monkeypatch.setattr(MiniMaxProvider, "query", fake_query)

    exit_code = await cli.main(["--provider", "minimax", "--provider", "kimi"])

    assert exit_code == 0
    assert "all good" in capsys.readouterr().out


def test_main_rejects_unknown_provider():
    with pytest.raises(SystemExit):
        asyncio.run(cli.main(["--provider", "nope"]))
