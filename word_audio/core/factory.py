"""Factory functions for creating configured instances"""

from dataclasses import dataclass
from typing import cast

from ..config.store import SettingsStore
from .audio_resolver import AudioResolver
from .cache_synchronizer import CacheSynchronizer
from .container import DIContainer, setup_default_container
from .interfaces import StorageInterface, TransportInterface, WorkspaceInterface
from .scheduler import SyncScheduler
from .word_audio_service import WordAudioService


@dataclass
class WordAudioApp:
    """Composition root owning the service and the sync scheduler"""

    store: SettingsStore
    service: WordAudioService
    scheduler: SyncScheduler

    def start(self) -> None:
        self.scheduler.start()

    def shutdown(self) -> None:
        self.scheduler.shutdown()


def create_app(container: DIContainer | None = None) -> WordAudioApp:
    """Wire every component from a container.

    The scheduler listens to settings updates so enabling periodic sync or
    changing its interval takes effect immediately.
    """
    container = container or setup_default_container()

    store = cast(SettingsStore, container.get(SettingsStore))
    storage = cast(StorageInterface, container.get(StorageInterface))
    transport = cast(TransportInterface, container.get(TransportInterface))
    workspace = cast(WorkspaceInterface, container.get(WorkspaceInterface))

    if not all([store, storage, transport, workspace]):
        raise RuntimeError(
            "Some required dependencies are not registered in the container"
        )

    resolver = AudioResolver(store.current, storage)
    synchronizer = CacheSynchronizer(store.current, storage, transport)
    service = WordAudioService(store.current, storage, resolver, synchronizer)
    scheduler = SyncScheduler(workspace, synchronizer, store.current)
    store.subscribe(scheduler.apply_settings)

    return WordAudioApp(store=store, service=service, scheduler=scheduler)


def create_word_audio_service(container: DIContainer | None = None) -> WordAudioService:
    """Convenience function to create the command service"""
    return create_app(container).service
