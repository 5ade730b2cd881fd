"""Display strings for reports and error messages.

English and Chinese tables are provided. The language is taken from
``QUOTA_STATUS_LANG`` if set, otherwise from ``LANG``.
"""

import os

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "account": "Account:",
        "plan": "Coding Plan",
        "no_quota_data": "No quota data available for this account.",
        "remaining": "Remaining {percent}%",
        "used": "Used: {used} / {total}",
        "reset_in": "Resets in: {duration}",
        "limit_reached": "⚠️  Usage is high, the quota will run out soon.",
        "api_error": "{provider} API error ({status}): {detail}",
        "request_failed": "{provider} request failed: {detail}",
        "timeout": "{provider} request timed out after {seconds}s",
        "invalid_response": "{provider} returned an unreadable response: {detail}",
        "unknown_error": "Unknown error",
        "token_expired": "{provider} access token has expired. Log in again to refresh it.",
        "minimax_config_required": (
            "MiniMax session not configured. Create {path} containing "
            '{{"session": "<HERTZ-SESSION cookie>"}}.'
        ),
        "bigmodel_config_required": (
            "Zhipu Coding Plan API key not found in {path} "
            '(expected a "zhipuai-coding-plan" or "zai-coding-plan" entry).'
        ),
        "kimi_config_required": (
            'Kimi API key not found in {path} (expected a "kimi-for-coding" entry).'
        ),
        "openai_config_required": (
            'OpenAI OAuth login not found in {path} (expected an "openai" entry).'
        ),
        "copilot_config_required": (
            "Copilot quota token not configured. Create {path} containing "
            '{{"token": "<PAT>", "username": "<login>", "tier": "pro"}}.'
        ),
        "minimax_prompt_limit": "Prompt limit (5h rolling window)",
        "bigmodel_token_limit": "Token limit ({window})",
        "bigmodel_mcp_limit": "MCP usage ({window})",
        "kimi_weekly_limit": "Weekly limit",
        "kimi_window_limit": "Rate limit ({window})",
        "openai_primary_window": "Primary window ({window})",
        "openai_secondary_window": "Secondary window ({window})",
        "copilot_premium_requests": "Premium requests (monthly)",
        "unit_prompts": "prompts",
        "unit_requests": "requests",
    },
    "zh": {
        "account": "账号：",
        "plan": "编程套餐",
        "no_quota_data": "该账号暂无额度数据。",
        "remaining": "剩余 {percent}%",
        "used": "已用：{used} / {total}",
        "reset_in": "重置倒计时：{duration}",
        "limit_reached": "⚠️  使用率较高，额度即将用尽。",
        "api_error": "{provider} API 错误 ({status})：{detail}",
        "request_failed": "{provider} 请求失败：{detail}",
        "timeout": "{provider} 请求超时（{seconds} 秒）",
        "invalid_response": "{provider} 返回了无法解析的响应：{detail}",
        "unknown_error": "未知错误",
        "token_expired": "{provider} 访问令牌已过期，请重新登录。",
        "minimax_config_required": (
            "未配置 MiniMax session。请创建 {path}，内容为 "
            '{{"session": "<HERTZ-SESSION cookie>"}}。'
        ),
        "bigmodel_config_required": (
            "未在 {path} 中找到智谱编程套餐 API Key"
            '（需要 "zhipuai-coding-plan" 或 "zai-coding-plan" 条目）。'
        ),
        "kimi_config_required": (
            '未在 {path} 中找到 Kimi API Key（需要 "kimi-for-coding" 条目）。'
        ),
        "openai_config_required": (
            '未在 {path} 中找到 OpenAI OAuth 登录信息（需要 "openai" 条目）。'
        ),
        "copilot_config_required": (
            "未配置 Copilot 额度令牌。请创建 {path}，内容为 "
            '{{"token": "<PAT>", "username": "<login>", "tier": "pro"}}。'
        ),
        "minimax_prompt_limit": "Prompt 额度（5 小时滚动窗口）",
        "bigmodel_token_limit": "Token 额度（{window}）",
        "bigmodel_mcp_limit": "MCP 用量（{window}）",
        "kimi_weekly_limit": "每周额度",
        "kimi_window_limit": "速率限制（{window}）",
        "openai_primary_window": "主窗口（{window}）",
        "openai_secondary_window": "次窗口（{window}）",
        "copilot_premium_requests": "高级请求（每月）",
        "unit_prompts": "次",
        "unit_requests": "次",
    },
}


def current_language() -> str:
    lang = os.environ.get("QUOTA_STATUS_LANG") or os.environ.get("LANG", "")
    return "zh" if lang.lower().startswith("zh") else "en"


def t(key: str, **kwargs: object) -> str:
    """Look up a display string and fill in its placeholders."""
    table = MESSAGES[current_language()]
    template = table.get(key, MESSAGES["en"][key])
    return template.format(**kwargs)
