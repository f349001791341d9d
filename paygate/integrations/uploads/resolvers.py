"""
File reference resolvers.

Two ways a qualification file reaches the client:
- StoredPathResolver: the file was already stored; the reference is a path
  relative to a storage root and must exist as a readable regular file.
- UploadedFileResolver: the file is an in-memory upload object (our
  UploadedFile, or anything shaped like a Starlette/FastAPI UploadFile).

Both raise FileResolutionError; the orchestrator turns that into a
precondition failure before any request is sent.
"""

from __future__ import annotations

import io
import mimetypes
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from paygate.error_handler import FileResolutionError
from paygate.integrations.contracts.uploads import FileRef, ResolvedFile

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(filename: str, declared: Optional[str] = None) -> str:
    if declared and declared.strip():
        return declared.strip()
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or DEFAULT_CONTENT_TYPE


class FileReferenceResolver(ABC):
    @abstractmethod
    def resolve(self, field_name: str, ref: FileRef) -> ResolvedFile:
        """Open `ref` for reading or raise FileResolutionError."""


class StoredPathResolver(FileReferenceResolver):
    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root).resolve()

    def resolve(self, field_name: str, ref: FileRef) -> ResolvedFile:
        if not isinstance(ref, (str, Path)) or not str(ref).strip():
            raise FileResolutionError(field_name, f"has an invalid path reference {ref!r}")

        path = (self.root / ref).resolve()
        if path != self.root and self.root not in path.parents:
            raise FileResolutionError(field_name, f"points outside the storage root: {ref}")
        if not path.exists():
            raise FileResolutionError(field_name, f"does not exist: {ref}")
        if not path.is_file():
            raise FileResolutionError(field_name, f"is not a regular file: {ref}")
        if not os.access(path, os.R_OK):
            raise FileResolutionError(field_name, f"is not readable: {ref}")

        try:
            stream = open(path, "rb")
        except OSError as exc:
            raise FileResolutionError(field_name, f"could not be opened: {exc}") from exc

        return ResolvedFile(
            field_name=field_name,
            filename=path.name,
            content_type=guess_content_type(path.name),
            stream=stream,
        )


@dataclass
class UploadedFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None


class UploadedFileResolver(FileReferenceResolver):
    def resolve(self, field_name: str, ref: FileRef) -> ResolvedFile:
        if isinstance(ref, UploadedFile):
            if not ref.filename:
                raise FileResolutionError(field_name, "has no filename")
            return ResolvedFile(
                field_name=field_name,
                filename=ref.filename,
                content_type=guess_content_type(ref.filename, ref.content_type),
                stream=io.BytesIO(ref.content),
            )

        filename = getattr(ref, "filename", None)
        handle: Any = getattr(ref, "file", None)
        if not isinstance(filename, str) or not filename or handle is None or not callable(getattr(handle, "read", None)):
            raise FileResolutionError(field_name, f"is not an uploaded file (got {type(ref).__name__})")

        # The caller owns the upload object; read it into our own buffer.
        try:
            if callable(getattr(handle, "seek", None)):
                handle.seek(0)
            content = handle.read()
        except (OSError, ValueError) as exc:
            raise FileResolutionError(field_name, f"could not be read: {exc}") from exc
        if isinstance(content, str):
            content = content.encode("utf-8")

        return ResolvedFile(
            field_name=field_name,
            filename=filename,
            content_type=guess_content_type(filename, getattr(ref, "content_type", None)),
            stream=io.BytesIO(content),
        )
