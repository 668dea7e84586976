# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""File-system resource provider — serves catalog files from a directory."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pymessage.kernel.exceptions import ResourceException, ResourceNotFoundException


class FileResource:
    """A catalog file on disk, stat'ed when it is handed out."""

    def __init__(self, path: str, file: Path, last_modified: int) -> None:
        self._path = path
        self._file = file
        self._last_modified = last_modified

    @property
    def path(self) -> str:
        return self._path

    @property
    def file(self) -> Path:
        return self._file

    @property
    def last_modified(self) -> int:
        return self._last_modified

    def open(self) -> BinaryIO:
        try:
            return self._file.open("rb")
        except OSError as exc:
            raise ResourceException(
                f"Cannot open resource {self._path}: {exc}",
                context={"path": self._path},
            ) from exc

    def __repr__(self) -> str:
        return f"FileResource(path={self._path!r}, last_modified={self._last_modified})"


class FileSystemResourceProvider:
    """Resolves resource names against *base_path*.

    Names are always relative to the base path; a leading ``/`` is ignored,
    so ``/messages.properties`` and ``messages.properties`` name the same
    file. Modification times are reported in epoch milliseconds.
    """

    def __init__(self, base_path: str | Path = ".") -> None:
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def has_resource(self, path: str) -> bool:
        return self._locate(path).is_file()

    def get_resource(self, path: str) -> FileResource:
        file = self._locate(path)
        try:
            stat = file.stat()
        except FileNotFoundError as exc:
            raise ResourceNotFoundException(
                f"Resource not found: {path}",
                context={"path": path, "base_path": str(self._base_path)},
            ) from exc
        except OSError as exc:
            raise ResourceException(
                f"Cannot stat resource {path}: {exc}",
                context={"path": path},
            ) from exc
        return FileResource(path, file, stat.st_mtime_ns // 1_000_000)

    def _locate(self, path: str) -> Path:
        return self._base_path / path.lstrip("/")
