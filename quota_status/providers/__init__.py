from .base import BaseProvider
from .bigmodel import BigModelProvider
from .copilot import CopilotProvider
from .kimi import KimiProvider
from .minimax import MiniMaxProvider
from .openai import OpenAIProvider

PROVIDERS: dict[str, type[BaseProvider]] = {
    "minimax": MiniMaxProvider,
    "bigmodel": BigModelProvider,
    "kimi": KimiProvider,
    "openai": OpenAIProvider,
    "copilot": CopilotProvider,
}


def get_provider(name: str) -> type[BaseProvider]:
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ValueError(f"Unknown provider: {name}") from None


__all__ = [
    "BaseProvider",
    "BigModelProvider",
    "CopilotProvider",
    "KimiProvider",
    "MiniMaxProvider",
    "OpenAIProvider",
    "PROVIDERS",
    "get_provider",
]
