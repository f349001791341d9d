from dataclasses import dataclass, field
from typing import Any, BinaryIO, Mapping

"""
Upload contracts.

Defines the request structure for qualification file uploads and the shape a
file reference takes once it has been resolved into a readable stream.

A file reference is whatever the configured resolver understands:
- a relative path under the storage root (StoredPathResolver)
- an in-memory uploaded-file object (UploadedFileResolver)
"""

FileRef = Any


@dataclass
class UploadSpec:
    files: Mapping[str, FileRef]
    partner_account: str
    platform_key: str


@dataclass
class ResolvedFile:
    field_name: str
    filename: str
    content_type: str
    stream: BinaryIO = field(repr=False)

    def as_multipart_part(self):
        return (self.field_name, (self.filename, self.stream, self.content_type))
