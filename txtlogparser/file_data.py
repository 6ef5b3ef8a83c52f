"""A file opened in a workspace."""

from __future__ import annotations

import os
from dataclasses import dataclass
from os import PathLike
from typing import Any, Mapping, Union


@dataclass
class FileData:
    """Path, size, time and selection state of one file in a workspace."""

    file_id: int = -1
    file_row: int = -1
    file_path: str = ""
    file_name: str = ""
    modified_time: int = 0
    file_size: int = 0
    selected: bool = False
    exists: bool = False

    @classmethod
    def from_path(cls, file_id: int, file_row: int, path: Union[str, PathLike]) -> "FileData":
        """Describe the file at ``path``; raises OSError if it cannot be read."""
        path_str = os.fspath(path)
        stat = os.stat(path_str)
        return cls(
            file_id=file_id,
            file_row=file_row,
            file_path=path_str,
            file_name=os.path.basename(path_str),
            modified_time=int(stat.st_mtime),
            file_size=stat.st_size,
            selected=True,
            exists=os.path.exists(path_str),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.file_id,
            "fileRow": self.file_row,
            "name": self.file_name,
            "path": self.file_path,
            "modifiedTime": self.modified_time,
            "fileSize": self.file_size,
            "selected": self.selected,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "FileData":
        """Rebuild from :meth:`to_json` output; raises ValueError without a valid id."""
        file_id = data.get("id", -1)
        if file_id == -1:
            raise ValueError("file entry has no id")
        path = data.get("path", "")
        return cls(
            file_id=file_id,
            file_row=data.get("fileRow", -1),
            file_path=path,
            file_name=data.get("name", ""),
            modified_time=data.get("modifiedTime", 0),
            file_size=data.get("fileSize", 0),
            selected=data.get("selected", False),
            exists=bool(path) and os.path.exists(path),
        )

    def display_name(self) -> str:
        """The stored name, or the last component of the path if none is stored."""
        if self.file_name:
            return self.file_name
        return os.path.basename(self.file_path) if self.file_path else ""