"""
Dependency Injection Container

Holds the services create_app() wires together so API routes and Celery
tasks can look them up by type.
"""

import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

SINGLETON = 'singleton'
OVERRIDE = 'override'
NOT_REGISTERED = 'not_registered'


class DependencyNotFoundError(Exception):
    """Raised when a type has no registration."""


class DependencyContainer:
    """
    Type-keyed service registry.

    Every registration is a shared instance. Overrides shadow registrations
    and exist for tests. Registration and lookup are serialized with a lock.
    """

    def __init__(self):
        self._services: Dict[Type, Any] = {}
        self._overrides: Dict[Type, Any] = {}
        self._lock = threading.Lock()

        # Built on first use, see get_container_access_repository()
        self._container_access_repository: Optional[Any] = None

    def register_singleton(self, interface: Type[T], implementation: T) -> None:
        """
        Share one instance for every lookup of `interface`.

        Example:
            container.register_singleton(RetryClassifier, RetryClassifier())
        """
        with self._lock:
            self._services[interface] = implementation
        logger.debug(f"Registered singleton: {interface.__name__}")

    def override(self, interface: Type[T], implementation: T) -> None:
        """Shadow any registration of `interface` with `implementation`."""
        with self._lock:
            self._overrides[interface] = implementation
        logger.debug(f"Overridden: {interface.__name__}")

    def clear_overrides(self) -> None:
        with self._lock:
            self._overrides.clear()

    def resolve(self, interface: Type[T]) -> T:
        """
        Look up the service registered for `interface`.

        Raises:
            DependencyNotFoundError: If nothing is registered for it
        """
        with self._lock:
            if interface in self._overrides:
                return self._overrides[interface]
            if interface in self._services:
                return self._services[interface]

        raise DependencyNotFoundError(
            f"No registration found for type: {interface.__name__}"
        )

    def get_registration_type(self, interface: Type) -> str:
        """Return 'override', 'singleton' or 'not_registered'."""
        with self._lock:
            if interface in self._overrides:
                return OVERRIDE
            return SINGLETON if interface in self._services else NOT_REGISTERED

    def is_registered(self, interface: Type) -> bool:
        return self.get_registration_type(interface) != NOT_REGISTERED

    def get_container_access_repository(self):
        """
        The container access repository for this process, built once by
        StorageFactory (GCS when a bucket is configured, else local disk).
        """
        if self._container_access_repository is None:
            from media_orchestrator.infrastructure.storage_factory import StorageFactory

            self._container_access_repository = StorageFactory.create_container_access()
            logger.debug("Created container access repository via StorageFactory")
        return self._container_access_repository
