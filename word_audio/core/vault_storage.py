"""Storage adapter over a local directory treated as the notes vault"""

import os
import tempfile
from pathlib import Path

from ..exceptions import StorageError
from ..logging_config import get_logger
from .constants import SyncConstants
from .interfaces import StorageInterface

logger = get_logger(__name__)


class LocalVaultStorage(StorageInterface):
    """Resolves vault-relative paths under a root directory.

    Writes go to a temporary file in the target folder and are moved into
    place, so a reader never sees a partially written file.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def full_path(self, path: str) -> Path:
        return self.root / path.lstrip("/")

    def exists(self, path: str) -> bool:
        return self.full_path(path).exists()

    def create_folder(self, path: str) -> None:
        try:
            self.full_path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError("create_folder", path, e) from e

    def _atomic_write(self, path: str, data: bytes) -> None:
        target = self.full_path(path)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=target.parent, prefix=f".{target.name}.", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("write", path, e) from e

    def write_binary(self, path: str, data: bytes) -> None:
        self._atomic_write(path, data)

    def read(self, path: str) -> str:
        try:
            return self.full_path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError("read", path, e) from e

    def write(self, path: str, content: str) -> None:
        self._atomic_write(path, content.encode("utf-8"))

    def list_markdown_files(self, folder: str) -> list[str]:
        base = self.full_path(folder) if folder else self.root
        if not base.is_dir():
            return []
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in base.rglob(f"*{SyncConstants.MARKDOWN_SUFFIX}")
            if p.is_file()
        )

    def resource_path(self, path: str) -> str | None:
        return self.full_path(path).resolve().as_uri()
