"""Data models for the word audio application"""

from .result_models import (
    AnnotationResult,
    FolderAnnotationResult,
    HttpResponse,
    SyncReport,
)
from .word_models import BlockScan, InsertOutcome, Position, WordMatch

__all__ = [
    "WordMatch",
    "Position",
    "BlockScan",
    "InsertOutcome",
    "HttpResponse",
    "SyncReport",
    "AnnotationResult",
    "FolderAnnotationResult",
]
