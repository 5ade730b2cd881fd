from datetime import datetime, timezone

import pytest

from quota_status.models import CopilotTokenAuth
from quota_status.providers.copilot import CopilotProvider, next_month_start


@pytest.fixture
def copilot_auth():
    return CopilotTokenAuth(token="github_pat_xxx", username="octocat", tier="pro")


@pytest.fixture
def copilot_provider(copilot_auth):
    provider = CopilotProvider(copilot_auth)
    provider.authenticate()
    return provider


@pytest.fixture
def sample_copilot_response():
    return {
        "timePeriod": {"year": 2026, "month": 1},
        "user": "octocat",
        "usageItems": [
            {
                "product": "Copilot",
                "sku": "Copilot Premium Request",
                "model": "Claude Sonnet 4",
                "unitType": "requests",
                "grossQuantity": 200,
                "netQuantity": 0,
            },
            {
                "product": "Copilot",
                "sku": "Copilot Premium Request",
                "model": "GPT-5",
                "unitType": "requests",
                "grossQuantity": 55,
                "netQuantity": 0,
            },
            {
                "product": "Actions",
                "sku": "Actions Linux",
                "unitType": "minutes",
                "grossQuantity": 1000,
            },
        ],
    }


def test_next_month_start():
    assert next_month_start(datetime(2026, 1, 30, tzinfo=timezone.utc)) == datetime(
        2026, 2, 1, tzinfo=timezone.utc
    )
    assert next_month_start(datetime(2026, 12, 5, tzinfo=timezone.utc)) == datetime(
        2027, 1, 1, tzinfo=timezone.utc
    )


def test_copilot_authenticate(copilot_provider):
    headers = copilot_provider._headers
    assert headers["Authorization"] == "Bearer github_pat_xxx"
    assert headers["Accept"] == "application/vnd.github+json"
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert copilot_provider.identity() == "octocat"


def test_copilot_parse_usage(copilot_provider, sample_copilot_response, now):
    usage = copilot_provider.parse_usage(sample_copilot_response, now=now)

    assert usage.plan_label == "Copilot Pro"
    window = usage.windows[0]
    assert window.total == 300
    assert window.used == 255
    assert window.remaining_percent == pytest.approx(15)
    assert window.reset_eta_seconds == 36 * 3600


def test_copilot_parse_no_usage(copilot_provider, now):
    window = copilot_provider.parse_usage({"usageItems": []}, now=now).windows[0]
    assert window.used == 0
    assert window.remaining_percent == 100


@pytest.mark.asyncio
async def test_copilot_query(copilot_auth, json_transport, sample_copilot_response):
    transport = json_transport(sample_copilot_response)
    result = await CopilotProvider(copilot_auth, transport=transport).query()

    assert result.success
    assert result.output.splitlines()[0].endswith("octocat (Copilot Pro)")
    assert "Used: 255 / 300 requests" in result.output
    assert "Usage is high" in result.output
    assert transport.requests[0].url.path == (
        "/users/octocat/settings/billing/premium_request/usage"
    )


@pytest.mark.asyncio
async def test_copilot_query_from_file(write_json, json_transport):
    write_json(
        "copilot-quota-token.json",
        {"token": "pat", "username": "someone", "tier": "pro+"},
    )
    transport = json_transport({"usageItems": [{"product": "copilot", "grossQuantity": 15}]})

    result = await CopilotProvider(transport=transport).query()

    assert result.success
    assert "Used: 15 / 1500 requests" in result.output


@pytest.mark.asyncio
async def test_copilot_query_unknown_tier_is_absent(write_json, json_transport):
    write_json(
        "copilot-quota-token.json",
        {"token": "pat", "username": "someone", "tier": "platinum"},
    )
    transport = json_transport({})

    result = await CopilotProvider(transport=transport).query()

    assert not result.success
    assert "copilot-quota-token.json" in result.error
    assert transport.requests == []


@pytest.mark.asyncio
async def test_copilot_query_null_fields(copilot_auth, json_transport):
    raw = {
        "usageItems": [
            {"product": None, "grossQuantity": 40},
            {"product": "Copilot", "grossQuantity": None},
            {"product": "Copilot", "grossQuantity": 5},
            None,
        ]
    }
    transport = json_transport(raw)

    result = await CopilotProvider(copilot_auth, transport=transport).query()

    assert result.success
    assert "Used: 5 / 300 requests" in result.output


def test_copilot_parse_null_items(copilot_provider, now):
    window = copilot_provider.parse_usage({"usageItems": None}, now=now).windows[0]
    assert window.used == 0
