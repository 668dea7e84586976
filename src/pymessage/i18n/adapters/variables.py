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
"""Ambient variable resolvers — where the resolver finds the current locale."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymessage.context.render_context import RenderContext


class RenderContextResolver:
    """Reads variables from the active :class:`RenderContext`.

    Returns ``None`` when no render is in progress.
    """

    def get(self, name: str) -> Any | None:
        ctx = RenderContext.current()
        if ctx is None:
            return None
        return ctx.get(name)


class MappingVariableResolver:
    """Serves variables from a fixed mapping, e.g. a configured default locale."""

    def __init__(self, variables: Mapping[str, Any] | None = None) -> None:
        self._variables = dict(variables or {})

    def get(self, name: str) -> Any | None:
        return self._variables.get(name)
