"""Shared fakes for the host collaborators"""

import pytest

from word_audio.config.settings import SyncSettings
from word_audio.core.interfaces import StorageInterface, TransportInterface
from word_audio.exceptions import StorageError, TransportError
from word_audio.models.result_models import HttpResponse


class MemoryStorage(StorageInterface):
    """Dictionary-backed vault"""

    def __init__(self, fail_create: bool = False, resource_capable: bool = True):
        self.files: dict[str, bytes] = {}
        self.folders: set[str] = set()
        self.fail_create = fail_create
        self.resource_capable = resource_capable

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.folders

    def create_folder(self, path: str) -> None:
        if self.fail_create:
            raise StorageError("create_folder", path, PermissionError("read-only vault"))
        self.folders.add(path)

    def write_binary(self, path: str, data: bytes) -> None:
        self.files[path] = data

    def read(self, path: str) -> str:
        if path not in self.files:
            raise StorageError("read", path, FileNotFoundError(path))
        return self.files[path].decode("utf-8")

    def write(self, path: str, content: str) -> None:
        self.files[path] = content.encode("utf-8")

    def list_markdown_files(self, folder: str) -> list[str]:
        return sorted(
            p for p in self.files if p.startswith(folder + "/") and p.endswith(".md")
        )

    def resource_path(self, path: str) -> str | None:
        return f"app://local/{path}" if self.resource_capable else None

    def indexed_resource_path(self, path: str) -> str | None:
        return f"app://index/{path}" if path in self.files else None


class FakeTransport(TransportInterface):
    """Answers 200 with a small body unless a word's URL is scripted otherwise"""

    def __init__(self, statuses: dict[str, int] | None = None, broken: set[str] | None = None):
        self.statuses = statuses or {}
        self.broken = broken or set()
        self.requested: list[str] = []

    def get(self, url: str) -> HttpResponse:
        self.requested.append(url)
        for marker in self.broken:
            if f"audio={marker}&" in url:
                raise TransportError(url, ConnectionError("connection reset"))
        for marker, status in self.statuses.items():
            if f"audio={marker}&" in url:
                return HttpResponse(status=status)
        return HttpResponse(status=200, content=b"ID3audio")


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def settings() -> SyncSettings:
    return SyncSettings(cache_dir="audio", max_downloads_per_run=5, download_delay=0)
