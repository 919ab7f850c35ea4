"""Workspace that treats one file in the vault as the active note"""

from ..logging_config import get_logger
from .interfaces import DocumentInterface, StorageInterface, WorkspaceInterface
from .text_document import TextDocument

logger = get_logger(__name__)


class FileWorkspace(WorkspaceInterface):
    """Reads the active note fresh from storage on every request"""

    def __init__(self, storage: StorageInterface, active_path: str | None = None):
        self.storage = storage
        self.active_path = active_path

    def open(self, path: str | None) -> None:
        """Switch the active note; None means no note is open"""
        self.active_path = path

    def active_document(self) -> DocumentInterface | None:
        if not self.active_path or not self.storage.exists(self.active_path):
            return None
        return TextDocument(self.storage.read(self.active_path))
