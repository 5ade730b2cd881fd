from .models import NoQuotaData, NormalizedUsage, QueryResult, UsageInfo
from .providers import PROVIDERS, get_provider

__all__ = [
    "NoQuotaData",
    "NormalizedUsage",
    "PROVIDERS",
    "QueryResult",
    "UsageInfo",
    "get_provider",
]
