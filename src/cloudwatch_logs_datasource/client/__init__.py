"""Region-scoped CloudWatch Logs clients."""

from .registry import ClientRegistry, create_logs_client, get_registry

__all__ = [
    "ClientRegistry",
    "create_logs_client",
    "get_registry",
]
