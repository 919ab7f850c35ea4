"""Result models for annotation and synchronization runs"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HttpResponse:
    """Minimal HTTP response returned by a transport"""

    status: int
    content: bytes = b""

    @property
    def ok(self) -> bool:
        """Check if the status is in the 2xx range"""
        return 200 <= self.status < 300


@dataclass
class SyncReport:
    """Counts from one cache synchronization run"""

    downloaded: int = 0
    skipped: int = 0
    failed: int = 0
    deferred: int = 0
    busy: bool = False
    failed_words: list[str] = field(default_factory=list)

    @property
    def total_seen(self) -> int:
        return self.downloaded + self.skipped + self.failed

    def summary(self) -> str:
        """One-line description used for logging"""
        return (
            f"Success: {self.downloaded}, Skipped: {self.skipped}, "
            f"Failed: {self.failed}, Deferred: {self.deferred}"
        )


@dataclass
class AnnotationResult:
    """Result of inserting audio blocks into a document"""

    inserted: int = 0
    skipped: int = 0
    inserted_words: list[str] = field(default_factory=list)
    downloaded: int = 0

    @property
    def modified(self) -> bool:
        return self.inserted > 0

    def merge(self, other: "AnnotationResult") -> None:
        """Fold another result into this one, keeping word order unique"""
        self.inserted += other.inserted
        self.skipped += other.skipped
        self.downloaded += other.downloaded
        for word in other.inserted_words:
            if word not in self.inserted_words:
                self.inserted_words.append(word)


@dataclass
class FolderAnnotationResult(AnnotationResult):
    """Result of annotating every note in the target folder"""

    files_total: int = 0
    files_modified: int = 0
    errors: list[str] = field(default_factory=list)
