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
"""StructlogErrorLogger — error sink handed to the message resolver."""

from __future__ import annotations

import logging
from typing import Any

import structlog


class StructlogErrorLogger:
    """Adapts a named structlog logger to the ``ErrorLogger`` protocol.

    ``is_error_enabled`` honours the effective level of the stdlib logger
    with the same name, so per-module levels from ``pymessage.logging.level``
    apply.
    """

    def __init__(self, name: str = "pymessage.i18n") -> None:
        self._name = name
        self._logger: Any = structlog.get_logger(name)

    @property
    def name(self) -> str:
        return self._name

    def is_error_enabled(self) -> bool:
        return logging.getLogger(self._name).isEnabledFor(logging.ERROR)

    def error(self, message: str, cause: BaseException | None = None) -> None:
        if cause is None:
            self._logger.error(message)
        else:
            self._logger.error(message, exc_info=cause)
