"""
Client registry for region-scoped CloudWatch Logs clients.

Keeps exactly one boto3 `logs` client per region string for the lifetime
of the registry. Clients are created lazily on first use and never
refreshed.
"""

import logging
import threading
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config

from ..config.constants import LOGS_SERVICE_NAME, USER_AGENT_EXTRA

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


def create_logs_client(region: str, profile_name: Optional[str] = None) -> Any:
    """
    Create a CloudWatch Logs client for the specified region.

    Args:
        region: AWS region name
        profile_name: Optional named profile from the shared AWS config

    Returns:
        boto3 CloudWatch Logs client

    Raises:
        botocore.exceptions.BotoCoreError: If the session or client cannot
            be built (invalid region, unknown profile, ...)
    """
    config = Config(user_agent_extra=USER_AGENT_EXTRA)
    session = boto3.Session(profile_name=profile_name, region_name=region)
    return session.client(LOGS_SERVICE_NAME, config=config)


class ClientRegistry:
    """
    Registry of CloudWatch Logs clients keyed by region.

    Construction happens under a lock, so concurrent first use of a region
    builds a single client.

    Usage:
        registry = ClientRegistry()
        client = registry.get_client("eu-west-1")
        assert registry.get_client("eu-west-1") is client
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        profile_name: Optional[str] = None,
    ):
        """
        Initialize the registry.

        Args:
            client_factory: Callable building a client for a region
                (defaults to create_logs_client)
            profile_name: AWS profile used by the default factory
        """
        if client_factory is None:

            def client_factory(region: str) -> Any:
                return create_logs_client(region, profile_name=profile_name)

        self._client_factory = client_factory
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_client(self, region: str) -> Any:
        """
        Get the client for a region, creating it on first use.

        Args:
            region: AWS region name

        Returns:
            The cached client for the region

        Raises:
            Any error raised by the client factory, unmodified
        """
        with self._lock:
            client = self._clients.get(region)
            if client is not None:
                logger.debug(f"Reusing CloudWatch Logs client for region '{region}'")
                return client

            client = self._client_factory(region)
            self._clients[region] = client
            logger.info(f"Created CloudWatch Logs client for region '{region}'")
            return client

    def list_regions(self) -> list[str]:
        """
        List regions with a cached client.

        Returns:
            Sorted list of region names
        """
        with self._lock:
            return sorted(self._clients.keys())

    def clear(self) -> None:
        """
        Drop all cached clients.

        Primarily used for testing to reset registry state.
        """
        with self._lock:
            self._clients.clear()
        logger.debug("Cleared CloudWatch Logs client registry")


# =============================================================================
# Convenience Functions
# =============================================================================

_default_registry: Optional[ClientRegistry] = None
_default_registry_lock = threading.Lock()


def get_registry() -> ClientRegistry:
    """
    Get the process-wide default registry.

    Returns:
        Shared ClientRegistry instance
    """
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            from ..config.settings import get_settings

            _default_registry = ClientRegistry(
                profile_name=get_settings().aws_profile
            )
        return _default_registry
