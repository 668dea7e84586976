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
"""Unified exception hierarchy for PyMessage.

All library exceptions inherit from PyMessageException so callers can catch
one base type. Only configuration errors ever reach the caller of a message
lookup; resource failures are raised by the collaborators and absorbed by
the resolver.

Categories:
- ConfigurationException: invalid settings, fatal at configuration time
- InfrastructureException: resource access and catalog parsing failures
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class PyMessageException(Exception):
    """Base exception for all PyMessage errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationException(PyMessageException):
    """A configuration option holds an unsupported value."""


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------


class InfrastructureException(PyMessageException):
    """Infrastructure failures: file access, stream reads, decoding."""


class ResourceException(InfrastructureException):
    """A resource could not be opened or read."""


class ResourceNotFoundException(ResourceException):
    """Requested resource does not exist."""


class CatalogParseException(ResourceException):
    """A catalog file is malformed or cannot be decoded."""
