from .orchestrator import UploadOrchestrator, UploadStage
from .resolvers import (
    FileReferenceResolver,
    StoredPathResolver,
    UploadedFile,
    UploadedFileResolver,
)

__all__ = [
    "FileReferenceResolver",
    "StoredPathResolver",
    "UploadOrchestrator",
    "UploadStage",
    "UploadedFile",
    "UploadedFileResolver",
]
