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
"""Fixtures for message resolution tests: catalog files on disk and collaborator spies."""

from __future__ import annotations

import os
import threading
import time
from pathlib import Path
from typing import BinaryIO

import pytest

from pymessage.i18n.adapters.filesystem import FileSystemResourceProvider
from pymessage.i18n.adapters.parsers import PropertiesFileParser

BASE_MTIME = 1_700_000_000


class CountingParser:
    """PropertiesFileParser that counts parses and can stall to widen races."""

    def __init__(self, delay: float = 0.0) -> None:
        self._delegate = PropertiesFileParser()
        self._delay = delay
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def parse(self, stream: BinaryIO, encoding: str) -> dict[str, str]:
        with self._lock:
            self.calls.append(encoding)
        if self._delay:
            time.sleep(self._delay)
        return self._delegate.parse(stream, encoding)


class RecordingErrorLogger:
    """ErrorLogger double that keeps every reported failure."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.errors: list[tuple[str, BaseException | None]] = []

    def is_error_enabled(self) -> bool:
        return self.enabled

    def error(self, message: str, cause: BaseException | None = None) -> None:
        self.errors.append((message, cause))


@pytest.fixture
def write_catalog(tmp_path: Path):
    """Write a catalog file under tmp_path with an explicit modification time."""

    def _write(name: str, content: str, mtime: int = BASE_MTIME, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode(encoding))
        os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture
def provider(tmp_path: Path) -> FileSystemResourceProvider:
    return FileSystemResourceProvider(tmp_path)


@pytest.fixture
def layered_catalogs(write_catalog):
    """Root, language and country catalogs that all define ``greeting``."""
    write_catalog("messages.properties", "greeting=Hello\nfarewell=Goodbye\nroot.only=root\n")
    write_catalog("messages_en.properties", "greeting=Hello (en)\nfarewell=Bye (en)\n")
    write_catalog("messages_en_US.properties", "greeting=Howdy\nfarewell=\n")


@pytest.fixture
def counting_parser() -> CountingParser:
    return CountingParser()


@pytest.fixture
def error_logger() -> RecordingErrorLogger:
    return RecordingErrorLogger()


@pytest.fixture
def slow_parser() -> CountingParser:
    return CountingParser(delay=0.05)
