"""
JSON encoding with a post-hoc failure signal.

``encode`` never raises for payloads the encoder cannot represent. The failure
is reported as a ``JsonError`` code on the returned ``EncodeResult`` and turned
into a human message by ``error_message``, the one translation table shared by
every envelope policy.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
import json
import re
from types import MappingProxyType
from typing import Any

from jsend.i18n import translate


class JsonError(IntEnum):
    NONE = 0
    DEPTH = 1
    STATE_MISMATCH = 2
    CTRL_CHAR = 3
    SYNTAX = 4
    UTF8 = 5
    RECURSION = 6
    INF_OR_NAN = 7
    UNSUPPORTED_TYPE = 8


class EncodeOption(IntFlag):
    PRETTY_PRINT = 1
    UNESCAPED_SLASHES = 2
    UNESCAPED_UNICODE = 4


_ERROR_MESSAGES = MappingProxyType(
    {
        JsonError.NONE: None,
        JsonError.DEPTH: "Maximum stack depth exceeded",
        JsonError.STATE_MISMATCH: "Underflow or the modes mismatch",
        JsonError.CTRL_CHAR: "Unexpected control character found",
        JsonError.SYNTAX: "Syntax error, malformed JSON",
        JsonError.UTF8: "Malformed UTF-8 characters, possibly incorrectly encoded",
        JsonError.RECURSION: "One or more recursive references in the value to be encoded",
        JsonError.INF_OR_NAN: "One or more NAN or INF values in the value to be encoded",
        JsonError.UNSUPPORTED_TYPE: "A value of a type that cannot be encoded was given",
    }
)

_NON_ASCII = re.compile(r"[^\x00-\x7f]")


@dataclass(frozen=True)
class EncodeResult:
    text: str | None
    error: JsonError = JsonError.NONE

    @property
    def ok(self) -> bool:
        return self.error is JsonError.NONE


def error_message(code: int) -> str | None:
    """
    Translate an encoder failure code into a message.

    Returns ``None`` for ``JsonError.NONE``. Codes outside the table produce an
    "unknown" message carrying the code rather than failing.
    """
    if code in _ERROR_MESSAGES:
        return _ERROR_MESSAGES[code]
    return translate("Unknown JSON error code: :code", {":code": str(int(code))})


def _default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _escape_non_ascii(match: re.Match[str]) -> str:
    codepoint = ord(match.group(0))
    if codepoint <= 0xFFFF:
        return f"\\u{codepoint:04x}"
    codepoint -= 0x10000
    high = 0xD800 | (codepoint >> 10)
    low = 0xDC00 | (codepoint & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}"


def _classify(exc: Exception) -> JsonError:
    if isinstance(exc, UnicodeError):
        return JsonError.UTF8
    if isinstance(exc, RecursionError):
        return JsonError.DEPTH
    if isinstance(exc, ValueError):
        text = str(exc)
        if "Circular reference" in text:
            return JsonError.RECURSION
        if "Out of range float" in text:
            return JsonError.INF_OR_NAN
    return JsonError.UNSUPPORTED_TYPE


def encode(value: Any, options: int | None = None) -> EncodeResult:
    flags = EncodeOption(options or 0)
    if flags & EncodeOption.PRETTY_PRINT:
        indent, separators = 4, (",", ": ")
    else:
        indent, separators = None, (",", ":")
    try:
        text = json.dumps(
            value,
            ensure_ascii=False,
            allow_nan=False,
            check_circular=True,
            indent=indent,
            separators=separators,
            default=_default,
        )
        # Lone surrogates survive json.dumps but are not valid UTF-8.
        text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        return EncodeResult(text=None, error=_classify(exc))

    # Outside of string literals JSON text is plain ASCII without slashes.
    if not flags & EncodeOption.UNESCAPED_SLASHES:
        text = text.replace("/", "\\/")
    if not flags & EncodeOption.UNESCAPED_UNICODE:
        text = _NON_ASCII.sub(_escape_non_ascii, text)
    return EncodeResult(text=text)
