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
"""Message functions — callables assigned to the function fields of a record."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from g11n.formatting.hooks import format_param, format_result
from g11n.formatting.printf import sprintf
from g11n.messages.declaration import FieldDescriptor


class MessageFunction:
    """Formats one message field on every call.

    The active dictionary is read through *dictionary* at call time, so a
    locale loaded after the record was initialized is picked up by the
    next call. The pattern falls back to the field's default when the
    dictionary has no entry for the field's key.
    """

    def __init__(self, field: FieldDescriptor, dictionary: Callable[[], Mapping[str, str]]) -> None:
        self._field = field
        self._dictionary = dictionary
        self.__name__ = field.name
        self.__qualname__ = field.key
        self.__signature__ = _signature(field)

    @property
    def key(self) -> str:
        return self._field.key

    def __call__(self, *args: Any) -> Any:
        field = self._field
        if field.param_types is not None and len(args) != len(field.param_types):
            raise TypeError(
                f"{field.key}() takes {len(field.param_types)} positional argument(s) but {len(args)} were given"
            )

        pattern = self._dictionary().get(field.key, field.pattern)
        formatted = sprintf(pattern, *(format_param(arg) for arg in args))
        return format_result(field.value_type, formatted)

    def __repr__(self) -> str:
        return f"<message function {self._field.key}>"


def _signature(field: FieldDescriptor) -> inspect.Signature:
    if field.param_types is None:
        parameters = [inspect.Parameter("args", inspect.Parameter.VAR_POSITIONAL)]
    else:
        parameters = [
            inspect.Parameter(f"arg{index}", inspect.Parameter.POSITIONAL_ONLY, annotation=annotation)
            for index, annotation in enumerate(field.param_types)
        ]
    return inspect.Signature(parameters, return_annotation=field.value_type)
