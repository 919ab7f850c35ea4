"""Dependency injection container for the host collaborators"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..config.store import SettingsStore
from .interfaces import StorageInterface, TransportInterface, WorkspaceInterface


class DIContainer:
    """Simple dependency injection container"""

    def __init__(self) -> None:
        self._services: dict[type, Any] = {}
        self._factories: dict[type, Callable[[], Any]] = {}
        self._singletons: dict[type, Any] = {}

    def register_instance(self, interface: type[Any], instance: Any) -> None:
        """Register a specific instance for an interface"""
        self._services[interface] = instance

    def register_singleton(
        self, interface: type[Any], factory: Callable[[], Any]
    ) -> None:
        """Register a factory whose first result is reused"""
        self._factories[interface] = factory
        self._singletons.setdefault(interface, None)

    def get(self, interface: type[Any]) -> Any | None:
        """Get an instance of the requested interface"""
        if interface in self._services:
            return self._services[interface]

        if self._singletons.get(interface) is not None:
            return self._singletons[interface]

        if interface in self._factories:
            instance = self._factories[interface]()
            if interface in self._singletons:
                self._singletons[interface] = instance
            return instance

        return None


def setup_default_container(
    vault_dir: Path | str = ".",
    settings_file: Path | str | None = None,
    active_path: str | None = None,
) -> DIContainer:
    """Setup container with the local-directory implementations"""
    from .http_transport import RequestsTransport
    from .vault_storage import LocalVaultStorage
    from .workspace import FileWorkspace

    container = DIContainer()
    store = SettingsStore(settings_file)
    storage = LocalVaultStorage(vault_dir)

    container.register_instance(SettingsStore, store)
    container.register_instance(StorageInterface, storage)
    container.register_singleton(
        TransportInterface,
        lambda: RequestsTransport(timeout=lambda: store.current().request_timeout),
    )
    container.register_singleton(
        WorkspaceInterface, lambda: FileWorkspace(storage, active_path)
    )
    return container
