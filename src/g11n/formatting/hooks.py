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
"""Formatter hooks — optional capabilities of parameter and result types."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ParamFormatter(Protocol):
    """A type that formats itself when passed to a message function."""

    def format_as_param(self) -> str: ...


@runtime_checkable
class ResultFormatter(Protocol):
    """A type that post-processes a formatted message before it is returned."""

    def format_result(self, formatted: str) -> str: ...


def format_param(value: Any) -> Any:
    """Return the hook output for *value*, or *value* itself when it has no hook."""
    if isinstance(value, ParamFormatter):
        return value.format_as_param()
    return value


def is_result_formatter(result_type: Any) -> bool:
    """Check whether instances of *result_type* implement :class:`ResultFormatter`."""
    return isinstance(result_type, type) and issubclass(result_type, ResultFormatter)


def format_result(result_type: Any, message: str) -> Any:
    """Convert a formatted *message* into *result_type*.

    The hook runs on a zero value of *result_type* and its output is
    converted back to *result_type*. Types without the hook receive the
    message unchanged (``str`` and unannotated results) or converted.
    """
    if is_result_formatter(result_type):
        zero = result_type()
        return result_type(zero.format_result(message))
    return coerce_result(result_type, message)


def coerce_result(result_type: Any, message: str) -> Any:
    """Convert *message* to *result_type* without applying any hook."""
    if result_type in (str, object, Any) or not isinstance(result_type, type):
        return message
    return result_type(message)
