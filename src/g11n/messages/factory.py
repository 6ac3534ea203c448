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
"""MessageFactory — wires message records and swaps their locale.

Typical use::

    class Greeter:
        title: str = message("Welcome")
        hello: Callable[[str], str] = message("Hello, %v!")

    factory = MessageFactory()
    factory.set_locale("fr", "yaml", "locales/fr.yaml")
    greeter = factory.create(Greeter)

    greeter.hello("Sam")        # "Hello, Sam!"
    factory.load_locale("fr")
    greeter.hello("Sam")        # "Bonjour, Sam!"
    greeter.title               # "Bienvenue"
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

import structlog

from g11n.config.properties.messages import G11nProperties
from g11n.core.config import Config
from g11n.formatting.hooks import coerce_result, format_param, format_result
from g11n.formatting.printf import sprintf
from g11n.kernel.exceptions import MessageSignatureException, UnknownFormatException, UnknownLocaleException
from g11n.locale.discovery import discover_locales
from g11n.locale.loaders import get_loader
from g11n.messages.declaration import FieldDescriptor, FieldKind, RecordDescriptor, describe
from g11n.messages.dispatch import MessageFunction

T = TypeVar("T")

logger = structlog.get_logger("g11n.messages")

_WRONG_RESULT_COUNT = "Wrong number of results in a g11n message. Expected 1, got {count}."
_UNKNOWN_FORMAT = "Unknown locale format '{format}'."
_UNKNOWN_LOCALE = "Unknown locale '{locale}'."

_EMPTY_DICTIONARY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class LocaleInfo:
    """Where a registered locale lives and which loader reads it."""

    format: str
    path: str


class _StringRefresher:
    """Re-applies the active dictionary to one string field of one record.

    The record is held weakly when its type allows it, so records dropped
    by the application stop being refreshed and are pruned.
    """

    __slots__ = ("_factory", "_field", "_record")

    def __init__(self, factory: MessageFactory, record: Any, field: FieldDescriptor) -> None:
        self._factory = factory
        self._field = field
        self._record = _reference(record)

    @property
    def record(self) -> Any:
        return self._record()

    def __call__(self) -> bool:
        """Assign the field; return ``False`` when the record is gone."""
        record = self._record()
        if record is None:
            return False
        field = self._field
        # No result hook here: it only runs on the value assigned at init.
        value = self._factory.dictionary.get(field.key, field.pattern)
        setattr(record, field.name, coerce_result(field.value_type, value))
        return True


def _reference(record: Any) -> Callable[[], Any]:
    try:
        return weakref.ref(record)
    except TypeError:
        return lambda: record


class MessageFactory:
    """Initializes message records and provides translations to them.

    The factory owns the locale registry, the active dictionary and the
    refresh callbacks of every string field it initialized. The active
    dictionary is an immutable snapshot replaced in a single assignment,
    so message functions read it without locking while registration,
    :meth:`init` and :meth:`load_locale` serialize on a writer lock.
    """

    def __init__(self) -> None:
        self._locales: dict[Hashable, LocaleInfo] = {}
        self._dictionary: Mapping[str, str] = _EMPTY_DICTIONARY
        self._refreshers: dict[tuple[int, str], _StringRefresher] = {}
        self._active_locale: Hashable | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Config) -> MessageFactory:
        """Build a factory from the ``g11n`` configuration section.

        Locales found under ``base-path`` are registered first, explicit
        ``locales`` entries override them, and ``default-locale`` is
        loaded when set.
        """
        properties = config.bind(G11nProperties)
        factory = cls()

        if properties.base_path:
            factory.set_locales(discover_locales(properties.base_path, properties.format), properties.format)

        for tag, source in properties.locales.items():
            if isinstance(source, str):
                factory.set_locale(tag, properties.format, source)
            else:
                factory.set_locale(tag, source.format or properties.format, source.path)

        if properties.default_locale:
            factory.load_locale(properties.default_locale)

        return factory

    # ------------------------------------------------------------------
    # Locale registry
    # ------------------------------------------------------------------

    def locales(self) -> list[Hashable]:
        """Return the registered locale tags, in no particular order."""
        return list(self._locales)

    def locale_info(self, tag: Hashable) -> LocaleInfo | None:
        return self._locales.get(tag)

    def set_locale(self, tag: Hashable, format: str, path: str) -> None:
        """Register a locale file in *format*, replacing any previous registration of *tag*.

        Neither the format nor the path is checked until the locale is loaded.
        """
        with self._lock:
            self._locales[tag] = LocaleInfo(format=format, path=path)
        logger.debug("locale_registered", locale=str(tag), format=format, path=path)

    def set_locales(self, locales: Mapping[Hashable, str], format: str) -> None:
        """Register several locale files sharing one *format*."""
        for tag, path in locales.items():
            self.set_locale(tag, format, path)

    # ------------------------------------------------------------------
    # Active dictionary
    # ------------------------------------------------------------------

    @property
    def dictionary(self) -> Mapping[str, str]:
        """The active ``{key: pattern}`` snapshot; empty until a locale is loaded."""
        return self._dictionary

    @property
    def active_locale(self) -> Hashable | None:
        """Tag of the last successfully loaded locale."""
        return self._active_locale

    @property
    def refresh_count(self) -> int:
        """Number of string fields that locale changes still reach."""
        with self._lock:
            refreshers = list(self._refreshers.values())
        return sum(1 for refresher in refreshers if refresher.record is not None)

    def load_locale(self, tag: Hashable) -> None:
        """Make *tag* the active locale of every record built by this factory.

        The dictionary is left untouched when the locale is unknown, its
        format has no loader, or the loader fails.

        Raises:
            UnknownLocaleException: *tag* was never registered.
            UnknownFormatException: no loader is registered for the locale's format.
            LocaleLoadException: the loader could not read the locale file.
        """
        with self._lock:
            info = self._locales.get(tag)
            if info is None:
                raise UnknownLocaleException(
                    _UNKNOWN_LOCALE.format(locale=tag),
                    code="UNKNOWN_LOCALE",
                    context={"locale": tag},
                )

            loader = get_loader(info.format)
            if loader is None:
                raise UnknownFormatException(
                    _UNKNOWN_FORMAT.format(format=info.format),
                    code="UNKNOWN_FORMAT",
                    context={"locale": tag, "format": info.format},
                )

            self._dictionary = MappingProxyType(dict(loader.load(info.path)))
            self._active_locale = tag
            refreshed = self._run_refreshers()

        logger.info(
            "locale_loaded",
            locale=str(tag),
            format=info.format,
            path=info.path,
            keys=len(self._dictionary),
            refreshed=refreshed,
        )

    def message(self, key: str, default: str, *args: Any) -> str:
        """Format the pattern stored under *key*, or *default*, with *args*."""
        pattern = self._dictionary.get(key, default)
        return sprintf(pattern, *(format_param(arg) for arg in args))

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def create(self, record_type: type[T]) -> T:
        """Instantiate *record_type* without arguments and initialize it."""
        return self.init(record_type())

    def init(self, record: T) -> T:
        """Wire the message fields of *record* and return it.

        Initializing the same record again re-wires its fields; its string
        fields keep one refresh callback each.

        Raises:
            MessageSignatureException: a message function does not declare
                exactly one result.
            UnsupportedFieldException: a field is neither a string, a
                message function nor a message record.
        """
        if isinstance(record, type):
            raise TypeError(f"init() expects a record instance, got the class {record.__qualname__}")

        descriptor = describe(type(record))
        _check_signatures(descriptor)

        with self._lock:
            self._init_record(record, descriptor)

        logger.debug("record_initialized", record=type(record).__qualname__)
        return record

    def release(self, record: Any) -> None:
        """Stop refreshing the string fields of *record*.

        Embedded records are released as well.
        """
        with self._lock:
            self._release(record)

    def _release(self, record: Any) -> None:
        for field in describe(type(record)).fields:
            if field.kind is FieldKind.RECORD:
                embedded = getattr(record, field.name, None)
                if embedded is not None:
                    self._release(embedded)
            elif field.kind is FieldKind.STRING:
                refresher = self._refreshers.get((id(record), field.name))
                if refresher is not None and refresher.record is record:
                    del self._refreshers[(id(record), field.name)]

    def _init_record(self, record: Any, descriptor: RecordDescriptor) -> None:
        for field in descriptor.fields:
            if field.kind is FieldKind.RECORD:
                embedded = field.value_type()
                setattr(record, field.name, embedded)
                self._init_record(embedded, describe(field.value_type))
            elif field.kind is FieldKind.STRING:
                self._init_string_field(record, field)
            else:
                self._init_function_field(record, field)

    def _init_string_field(self, record: Any, field: FieldDescriptor) -> None:
        value = format_result(field.value_type, field.pattern)

        key = (id(record), field.name)
        self._refreshers.pop(key, None)
        self._refreshers[key] = _StringRefresher(self, record, field)

        setattr(record, field.name, value)

    def _init_function_field(self, record: Any, field: FieldDescriptor) -> None:
        setattr(record, field.name, MessageFunction(field, lambda: self._dictionary))

    def _run_refreshers(self) -> int:
        refreshed = 0
        dead: list[tuple[int, str]] = []
        for key, refresher in list(self._refreshers.items()):
            if refresher():
                refreshed += 1
            else:
                dead.append(key)

        for key in dead:
            del self._refreshers[key]
        if dead:
            logger.debug("refresh_callbacks_pruned", count=len(dead))

        return refreshed


def _check_signatures(descriptor: RecordDescriptor) -> None:
    for field in _walk(descriptor):
        if field.kind is FieldKind.FUNCTION and field.result_count != 1:
            raise MessageSignatureException(
                _WRONG_RESULT_COUNT.format(count=field.result_count),
                code="WRONG_RESULT_COUNT",
                context={"field": field.key, "count": field.result_count},
            )


def _walk(descriptor: RecordDescriptor) -> Iterable[FieldDescriptor]:
    for field in descriptor.fields:
        if field.kind is FieldKind.RECORD:
            yield from _walk(describe(field.value_type))
        else:
            yield field
