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
"""Positional printf-style formatting for message patterns.

Patterns use ``%``-verbs consumed left to right by the call arguments::

    sprintf("Hello, %v! You have %d new %s.", "Sam", 3, "messages")

Supported verbs: ``v s`` (text), ``t`` (boolean), ``d`` (integer), ``f F e E g G`` (float),
``x X o b`` (integer bases), ``c`` (character), ``q`` (quoted string) and
``%%`` (a literal percent sign), each with optional ``-+# 0`` flags, width
and precision.

Formatting never raises. A mismatch between pattern and arguments is
rendered inline so the problem is visible in the output:

- ``%!d(MISSING)`` — the pattern has more verbs than arguments,
- ``%!(EXTRA int=3)`` — arguments left over after the last verb,
- ``%!d(str=abc)`` — the argument cannot be rendered with the verb,
- ``%!(NOVERB)`` — a trailing ``%`` without a verb.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any

_VERB_RE = re.compile(
    r"%(?P<flags>[-+# 0]*)(?P<width>\d+)?(?:\.(?P<precision>\d*))?(?P<verb>.?)",
    re.DOTALL,
)


class _BadVerb(Exception):
    """Raised by a converter when the argument does not suit the verb."""


def sprintf(pattern: str, *args: Any) -> str:
    """Format *pattern* with positional *args*."""
    parts: list[str] = []
    position = 0
    consumed = 0

    for match in _VERB_RE.finditer(pattern):
        parts.append(pattern[position : match.start()])
        position = match.end()
        verb = match.group("verb")

        if verb == "%":
            parts.append("%")
            continue
        if not verb:
            parts.append("%!(NOVERB)")
            continue
        if consumed >= len(args):
            parts.append(f"%!{verb}(MISSING)")
            continue

        parts.append(_format_one(match, verb, args[consumed]))
        consumed += 1

    parts.append(pattern[position:])

    if consumed < len(args):
        extras = ", ".join(_describe(arg) for arg in args[consumed:])
        parts.append(f"%!(EXTRA {extras})")

    return "".join(parts)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_one(match: re.Match[str], verb: str, arg: Any) -> str:
    converter = _CONVERTERS.get(verb)
    if converter is None:
        return f"%!{verb}({_describe(arg)})"

    spec = "%" + match.group("flags") + (match.group("width") or "")
    precision = match.group("precision")
    if precision is not None:
        spec += "." + (precision or "0")

    try:
        py_verb, value = converter(verb, arg)
        return (spec + py_verb) % (value,)
    except (_BadVerb, TypeError, ValueError, OverflowError):
        return f"%!{verb}({_describe(arg)})"


def _describe(arg: Any) -> str:
    if arg is None:
        return "<nil>"
    if isinstance(arg, bool):
        return f"bool={_bool_text(arg)}"
    return f"{type(arg).__name__}={arg}"


def _bool_text(arg: bool) -> str:
    return "true" if arg else "false"


def _is_integer(arg: Any) -> bool:
    return isinstance(arg, int) and not isinstance(arg, bool)


def _text(verb: str, arg: Any) -> tuple[str, Any]:
    if arg is None:
        return "s", "<nil>"
    if isinstance(arg, bool):
        return "s", _bool_text(arg)
    return "s", str(arg)


def _bool(verb: str, arg: Any) -> tuple[str, Any]:
    if not isinstance(arg, bool):
        raise _BadVerb(verb)
    return "s", _bool_text(arg)


def _integer(verb: str, arg: Any) -> tuple[str, Any]:
    if not _is_integer(arg):
        raise _BadVerb(verb)
    return verb, arg


def _float(verb: str, arg: Any) -> tuple[str, Any]:
    if not (_is_integer(arg) or isinstance(arg, float)):
        raise _BadVerb(verb)
    return verb.lower() if verb == "F" else verb, float(arg)


def _hex(verb: str, arg: Any) -> tuple[str, Any]:
    if _is_integer(arg):
        return verb, arg
    if isinstance(arg, str):
        arg = arg.encode("utf-8")
    if isinstance(arg, (bytes, bytearray)):
        digits = arg.hex()
        return "s", digits.upper() if verb == "X" else digits
    raise _BadVerb(verb)


def _binary(verb: str, arg: Any) -> tuple[str, Any]:
    if not _is_integer(arg):
        raise _BadVerb(verb)
    return "s", format(arg, "b")


def _char(verb: str, arg: Any) -> tuple[str, Any]:
    if not _is_integer(arg):
        raise _BadVerb(verb)
    return "s", chr(arg)


def _quoted(verb: str, arg: Any) -> tuple[str, Any]:
    if isinstance(arg, str):
        return "s", json.dumps(arg, ensure_ascii=False)
    if _is_integer(arg):
        return "s", "'" + chr(arg) + "'"
    raise _BadVerb(verb)


_CONVERTERS: dict[str, Callable[[str, Any], tuple[str, Any]]] = {
    "v": _text,
    "s": _text,
    "t": _bool,
    "d": _integer,
    "o": _integer,
    "f": _float,
    "F": _float,
    "e": _float,
    "E": _float,
    "g": _float,
    "G": _float,
    "x": _hex,
    "X": _hex,
    "b": _binary,
    "c": _char,
    "q": _quoted,
}
