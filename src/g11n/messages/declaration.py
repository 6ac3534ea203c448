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
"""Message record declarations and their cached field descriptors.

A message record is a plain class whose annotated fields are user-facing
strings or message functions, each with a default pattern::

    class Greeter:
        title: str = message("Welcome")
        hello: Callable[[str], str] = message("Hello, %v!")

Every field is addressed in locale files by the key
``"<TypeName>.<field_name>"`` (``"Greeter.hello"`` above). Fields
annotated with another record class are embedded records: the factory
creates and wires a fresh instance for them. Fields inherited from a base
record keep the key of the class that declares them.
"""

from __future__ import annotations

import collections.abc
import enum
import inspect
import typing
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar, get_args, get_origin, get_type_hints

from g11n.kernel.exceptions import ConfigurationException, UnsupportedFieldException

T = TypeVar("T")

_DESCRIPTOR_ATTR = "__g11n_descriptor__"
_NAMESPACE_ATTR = "__g11n_namespace__"


@dataclass(frozen=True)
class MessageDefault:
    """Class-level marker carrying the default pattern of a message field."""

    pattern: str


def message(pattern: str = "") -> Any:
    """Declare the default *pattern* of a message field.

    Typed as ``Any`` so that it can stand in for both ``str`` and
    ``Callable[..., str]`` annotations, like :func:`dataclasses.field`.
    """
    return MessageDefault(pattern)


class FieldKind(enum.Enum):
    STRING = "string"
    FUNCTION = "function"
    RECORD = "record"


@dataclass(frozen=True)
class FieldDescriptor:
    """How one record field is wired.

    ``value_type`` is the string type for string fields, the declared
    result type for function fields and the record class for embedded
    records. ``param_types`` is ``None`` when a function field accepts any
    arguments (``Callable[..., R]``).
    """

    name: str
    kind: FieldKind
    key: str
    pattern: str
    value_type: Any
    param_types: tuple[Any, ...] | None = None
    result_count: int = 1


@dataclass(frozen=True)
class RecordDescriptor:
    """The message fields of a record class, in declaration order."""

    record_type: type
    fields: tuple[FieldDescriptor, ...]

    def catalog(self) -> dict[str, str]:
        """Return the default ``{key: pattern}`` dictionary of the record.

        Embedded records contribute their own catalogs.
        """
        entries: dict[str, str] = {}
        for field in self.fields:
            if field.kind is FieldKind.RECORD:
                entries.update(describe(field.value_type).catalog())
            else:
                entries[field.key] = field.pattern
        return entries


def message_record(cls: type[T] | None = None, *, namespace: str | None = None) -> Any:
    """Mark a class as a message record and validate its fields eagerly.

    *namespace* replaces the type name in the message keys of the fields
    this class declares, e.g. ``namespace="billing.Greeter"`` yields keys
    such as ``"billing.Greeter.hello"``. Usable bare or with arguments::

        @message_record
        class Greeter: ...

        @message_record(namespace="billing.Greeter")
        class Greeter: ...
    """

    def decorator(record_cls: type[T]) -> type[T]:
        setattr(record_cls, _NAMESPACE_ATTR, namespace or record_cls.__name__)
        describe(record_cls)
        return record_cls

    if cls is not None:
        return decorator(cls)
    return decorator


def is_record_type(value: Any) -> bool:
    """Check whether *value* is a class usable as an embedded message record.

    Any user class declaring annotated fields qualifies, provided every
    field describes as a string, a message function or another record.
    """
    if not _declares_fields(value):
        return False
    try:
        describe(value)
    except ConfigurationException:
        return False
    return True


def describe(record_type: type) -> RecordDescriptor:
    """Return the cached :class:`RecordDescriptor` of *record_type*, building it once.

    Raises :class:`UnsupportedFieldException` for fields that are neither
    strings, message functions nor records.
    """
    cached = vars(record_type).get(_DESCRIPTOR_ATTR)
    if cached is not None:
        return cached
    if record_type in _in_progress:
        raise ConfigurationException(
            f"Message record '{record_type.__qualname__}' embeds itself",
            code="RECURSIVE_RECORD",
            context={"record": record_type.__qualname__},
        )

    _in_progress.add(record_type)
    try:
        descriptor = _build_descriptor(record_type)
    finally:
        _in_progress.discard(record_type)
    setattr(record_type, _DESCRIPTOR_ATTR, descriptor)
    return descriptor


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_in_progress: set[type] = set()


def _build_descriptor(record_type: type) -> RecordDescriptor:
    try:
        hints = get_type_hints(record_type)
    except NameError as exc:
        raise ConfigurationException(
            f"Cannot resolve the annotations of message record '{record_type.__qualname__}': {exc}",
            code="UNRESOLVED_ANNOTATION",
            context={"record": record_type.__qualname__},
        ) from exc

    declared: dict[str, type] = {}
    for klass in _record_bases(record_type):
        for name in inspect.get_annotations(klass):
            declared[name] = klass

    fields: list[FieldDescriptor] = []
    for name, declaring in declared.items():
        annotation = hints.get(name)
        if name.startswith("_") or get_origin(annotation) is ClassVar:
            continue
        fields.append(_describe_field(record_type, declaring, name, annotation))

    return RecordDescriptor(record_type=record_type, fields=tuple(fields))


def _declares_fields(value: Any) -> bool:
    if not isinstance(value, type) or issubclass(value, str):
        return False
    return any(
        _NAMESPACE_ATTR in vars(klass) or inspect.get_annotations(klass) for klass in _record_bases(value)
    )


def _record_bases(record_type: type) -> list[type]:
    """Classes of the MRO that may declare message fields, base classes first."""
    return [
        klass
        for klass in reversed(record_type.__mro__)
        if klass is not object and klass.__module__ not in ("builtins", "typing")
    ]


def _describe_field(record_type: type, declaring: type, name: str, annotation: Any) -> FieldDescriptor:
    namespace = vars(declaring).get(_NAMESPACE_ATTR) or declaring.__name__
    key = f"{namespace}.{name}"
    pattern = _default_pattern(declaring, name)

    if isinstance(annotation, type) and issubclass(annotation, str):
        return FieldDescriptor(name=name, kind=FieldKind.STRING, key=key, pattern=pattern, value_type=annotation)

    if _is_callable_annotation(annotation):
        param_types, result_type = _callable_signature(annotation)
        return FieldDescriptor(
            name=name,
            kind=FieldKind.FUNCTION,
            key=key,
            pattern=pattern,
            value_type=result_type,
            param_types=param_types,
            result_count=_result_count(result_type),
        )

    if _declares_fields(annotation):
        describe(annotation)
        return FieldDescriptor(name=name, kind=FieldKind.RECORD, key=key, pattern="", value_type=annotation)

    raise UnsupportedFieldException(
        f"Field '{record_type.__qualname__}.{name}' has unsupported type {annotation!r}; "
        "expected str, a Callable returning one value, or a message record",
        code="UNSUPPORTED_FIELD",
        context={"record": record_type.__qualname__, "field": name},
    )


def _default_pattern(declaring: type, name: str) -> str:
    default = vars(declaring).get(name)
    if isinstance(default, MessageDefault):
        return default.pattern
    if isinstance(default, str):
        return default
    return ""


def _is_callable_annotation(annotation: Any) -> bool:
    return (
        annotation is collections.abc.Callable
        or annotation is typing.Callable
        or get_origin(annotation) is collections.abc.Callable
    )


def _callable_signature(annotation: Any) -> tuple[tuple[Any, ...] | None, Any]:
    args = get_args(annotation)
    if not args:
        return None, Any
    params, result = args[0], args[-1]
    if params is Ellipsis:
        return None, result
    return tuple(params), result


def _result_count(result_type: Any) -> int:
    """Number of values a message function declares to return.

    ``None`` declares none; a fixed-length ``tuple[A, B]`` declares one per
    element.
    """
    if result_type is None or result_type is type(None):
        return 0
    if get_origin(result_type) is tuple:
        items = get_args(result_type)
        if len(items) == 2 and items[1] is Ellipsis:
            return 1
        return len(items)
    return 1
