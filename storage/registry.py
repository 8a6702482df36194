"""Registry of storage providers, looked up by name and chosen per chunk."""

import random
from typing import Dict, Iterable, List, Optional

from common.exceptions import InvalidInputError, ProviderUnavailableError
from common.logging_config import get_logger
from storage.base import StorageProvider

logger = get_logger(__name__)


class ProviderRegistry:
    """
    Holds the registered storage providers in registration order.
    """

    def __init__(self, providers: Optional[Iterable[StorageProvider]] = None):
        self._providers: Dict[str, StorageProvider] = {}
        for provider in providers or ():
            self.register(provider)

    def register(self, provider: StorageProvider) -> None:
        if provider.name in self._providers:
            raise InvalidInputError(f"Storage provider already registered: {provider.name}")
        self._providers[provider.name] = provider
        logger.info(f"Registered storage provider: {provider.name}")

    def get(self, name: str) -> StorageProvider:
        """
        Resolve a provider by the name recorded on a chunk.

        Raises:
            ProviderUnavailableError: If no provider with that name is registered
        """
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderUnavailableError(f"Storage provider not found: {name}")
        return provider

    def names(self) -> List[str]:
        return list(self._providers)

    def providers(self) -> List[StorageProvider]:
        return list(self._providers.values())

    def choose(self, rng: random.Random) -> StorageProvider:
        """
        Pick a provider uniformly at random.

        Args:
            rng: Random source owned by the caller

        Raises:
            ProviderUnavailableError: If no providers are registered
        """
        if not self._providers:
            raise ProviderUnavailableError("No storage providers registered")
        return rng.choice(self.providers())

    def __contains__(self, name: str) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
