"""Request parameter values.

Parameters are plain JSON-compatible values, except for ``FileRef`` which
marks a value as file content to be uploaded as its own multipart part.
"""

from __future__ import annotations

import mimetypes
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

FILE_MARKER = "@"


@dataclass(frozen=True, slots=True)
class FileRef:
    """A parameter whose value is the content of a local file."""

    path: str
    filename: str | None = None
    content_type: str | None = None

    @classmethod
    def from_marker(cls, value: str) -> FileRef:
        """Convert an ``@/path/to/file`` marker string into a FileRef."""
        if not value.startswith(FILE_MARKER) or len(value) == 1:
            raise ValueError(f"Not a file marker: {value!r}")
        return cls(path=value[len(FILE_MARKER) :])

    @property
    def resolved_path(self) -> str:
        return os.path.realpath(os.path.expanduser(self.path))

    @property
    def upload_name(self) -> str:
        return self.filename or os.path.basename(self.resolved_path)

    @property
    def upload_content_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.upload_name)
        return guessed or "application/octet-stream"


def file(path: str | os.PathLike[str], content_type: str | None = None) -> FileRef:
    """Shortcut for ``FileRef(path)``."""
    return FileRef(path=os.fspath(path), content_type=content_type)


ParamValue = Union[
    str,
    int,
    float,
    bool,
    None,
    list["ParamValue"],
    dict[str, "ParamValue"],
    FileRef,
]


def split_params(
    params: Mapping[str, Any] | None,
) -> tuple[dict[str, FileRef], dict[str, Any]]:
    """Partition parameters into file parameters and plain fields.

    Only top-level ``FileRef`` values count as files. Strings are always
    fields, including ones that start with ``@``.
    """
    files: dict[str, FileRef] = {}
    fields: dict[str, Any] = {}
    for name, value in (params or {}).items():
        if isinstance(value, FileRef):
            files[name] = value
        else:
            fields[name] = value
    return files, fields
