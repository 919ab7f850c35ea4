"""Interface definitions for the collaborators the core depends on"""

from abc import ABC, abstractmethod

from ..models.result_models import HttpResponse
from ..models.word_models import Position


class DocumentInterface(ABC):
    """Editable text buffer addressed by line"""

    @abstractmethod
    def get_line(self, line: int) -> str | None:
        """Return the text of a line without its newline, or None past the end"""
        pass

    @abstractmethod
    def line_count(self) -> int:
        """Return the number of lines in the buffer"""
        pass

    @abstractmethod
    def replace_range(
        self, text: str, start: Position, end: Position | None = None
    ) -> None:
        """Replace the text between two positions (insert when end is None)"""
        pass

    @abstractmethod
    def get_value(self) -> str:
        """Return the whole buffer"""
        pass


class StorageInterface(ABC):
    """Vault-relative file storage"""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file or folder exists"""
        pass

    @abstractmethod
    def create_folder(self, path: str) -> None:
        """Create a folder, including missing parents"""
        pass

    @abstractmethod
    def write_binary(self, path: str, data: bytes) -> None:
        """Write a whole file in one step"""
        pass

    @abstractmethod
    def read(self, path: str) -> str:
        """Read a text file"""
        pass

    @abstractmethod
    def write(self, path: str, content: str) -> None:
        """Replace the contents of a text file"""
        pass

    @abstractmethod
    def list_markdown_files(self, folder: str) -> list[str]:
        """List Markdown files under a folder, recursively, sorted by path"""
        pass

    def resource_path(self, path: str) -> str | None:
        """Return a playable resource URL for a path, if the adapter can"""
        return None

    def indexed_resource_path(self, path: str) -> str | None:
        """Return a resource URL through the file index, if the file is indexed"""
        return None


class TransportInterface(ABC):
    """HTTP GET that reports statuses instead of raising on them"""

    @abstractmethod
    def get(self, url: str) -> HttpResponse:
        """Fetch a URL; raises TransportError only when no response arrived"""
        pass


class WorkspaceInterface(ABC):
    """Host editor workspace"""

    @abstractmethod
    def active_document(self) -> DocumentInterface | None:
        """Return the document currently being edited, if any"""
        pass
