"""
JSend response envelope.

An envelope carries ``code``, ``message``, ``status`` and a ``data`` mapping and
renders them as one JSON object::

    {"code": ..., "data": {...}, "message": ..., "status": "success"}

Which statuses are valid, and whether falsy ``data`` entries are dropped from
the rendered form, is decided by the envelope's ``EnvelopePolicy``. ``STRICT``
allows ``success``/``fail``/``error`` and renders ``data`` as stored.
``LENIENT`` allows ``success``/``error`` and prunes falsy entries at render
time, on a copy, so the stored ``data`` is left untouched.

When the payload cannot be encoded, ``render`` rewrites the envelope into an
error report (code 500, the policy's error status, a "JSON error: ..." message)
and returns that instead of raising.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from jsend.encoding import encode, error_message
from jsend.errors import EnvelopeError, InvalidStatusError, MissingKeyError
from jsend.i18n import translate


logger = logging.getLogger("jsend.envelope")

SUCCESS = "success"
FAIL = "fail"
ERROR = "error"

CONTENT_TYPE = "application/json"
FORMAT_HEADER = "X-Response-Format"
FORMAT_NAME = "jsend"

_MISSING: Any = object()


class ResponseCarrier(Protocol):
    def set_body(self, body: str) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...


@dataclass(frozen=True)
class EnvelopePolicy:
    name: str
    statuses: frozenset[str]
    error_status: str = ERROR
    prune_falsy: bool = False

    def __post_init__(self) -> None:
        if SUCCESS not in self.statuses:
            raise ValueError(f"Policy {self.name!r} must allow the {SUCCESS!r} status")
        if self.error_status not in self.statuses:
            raise ValueError(f"Policy {self.name!r} error status {self.error_status!r} is not an allowed status")


STRICT = EnvelopePolicy(name="strict", statuses=frozenset({SUCCESS, FAIL, ERROR}))
LENIENT = EnvelopePolicy(name="lenient", statuses=frozenset({SUCCESS, ERROR}), prune_falsy=True)


class _Bound:
    __slots__ = ("supplier",)

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self.supplier = supplier


def _resolve(value: Any) -> Any:
    if isinstance(value, _Bound):
        return value.supplier()
    return value


def _step(current: Any, key: Any) -> Any:
    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        if isinstance(key, str) and key.isdigit() and int(key) in current:
            return current[int(key)]
        return _MISSING
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes, bytearray)):
        if isinstance(key, str) and key.isdigit():
            key = int(key)
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(current):
            return current[key]
    return _MISSING


def _describe(exc: BaseException) -> str:
    code = getattr(exc, "error_code", 0)
    message = getattr(exc, "message", None) or str(exc)
    return f"{type(exc).__name__} [ {code} ]: {message}"


class Envelope:
    def __init__(self, data: Mapping[str, Any] | None = None, *, policy: EnvelopePolicy = STRICT) -> None:
        self._policy = policy
        self._code: int | None = None
        self._message: str | None = None
        self._status: str = SUCCESS
        self._data: dict[str, Any] = {}
        if data is not None:
            self.set(data)

    @classmethod
    def strict(cls, data: Mapping[str, Any] | None = None) -> Envelope:
        return cls(data, policy=STRICT)

    @classmethod
    def lenient(cls, data: Mapping[str, Any] | None = None) -> Envelope:
        return cls(data, policy=LENIENT)

    @property
    def policy(self) -> EnvelopePolicy:
        return self._policy

    def __repr__(self) -> str:
        return (
            f"<Envelope policy={self._policy.name} status={self._status} "
            f"code={self._code!r} keys={sorted(map(str, self._data))}>"
        )

    # Field accessors: no argument reads, an argument writes and returns self.

    def code(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._code
        self._code = value
        return self

    def message(self, template: Any = _MISSING, values: Mapping[str, object] | None = None) -> Any:
        if template is _MISSING:
            return self._message
        self._message = None if template is None else translate(template, values)
        return self

    def status(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._status
        if not isinstance(value, str) or value not in self._policy.statuses:
            raise InvalidStatusError(value, self._policy.statuses)
        self._status = value
        return self

    # Payload access.

    def get(self, path: str | Sequence[Any], default: Any = None, delimiter: str = ".") -> Any:
        """
        Look up a payload value by key or path.

        ``path`` is either a key, a ``delimiter``-separated path such as
        ``"post.author.name"`` or a sequence of keys. Integer segments index
        into lists. Any missing segment yields ``default``.
        """
        if isinstance(path, str):
            if path in self._data:
                return _resolve(self._data[path])
            keys: Sequence[Any] = path.strip(f"{delimiter} ").split(delimiter)
        else:
            keys = list(path)
        if not keys:
            return default

        current: Any = self._data
        for key in keys:
            current = _step(_resolve(current), key)
            if current is _MISSING:
                return default
        return _resolve(current)

    def set(self, key: str | Mapping[str, Any], value: Any = None) -> Envelope:
        if isinstance(key, Mapping):
            self._data = dict(key)
            return self
        self._data[key] = value
        return self

    def update(self, values: Mapping[str, Any]) -> Envelope:
        for key, value in values.items():
            self.set(key, value)
        return self

    def bind(self, key: str, supplier: Callable[[], Any]) -> Envelope:
        """Store ``supplier`` under ``key``; it is called each time the value is read or rendered."""
        if not callable(supplier):
            raise TypeError(f"bind() expects a zero-argument callable, got {type(supplier).__name__}")
        self._data[key] = _Bound(supplier)
        return self

    def __getitem__(self, key: str) -> Any:
        if key not in self._data:
            raise MissingKeyError(key)
        return _resolve(self._data[key])

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    # Rendering.

    def payload(self) -> dict[str, Any]:
        data = {key: _resolve(value) for key, value in self._data.items()}
        if self._policy.prune_falsy:
            data = {key: value for key, value in data.items() if value}
        return self._wire(data)

    def _wire(self, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "code": self._code,
            "data": data,
            "message": self._message,
            "status": self._status,
        }

    def render(self, options: int | None = None) -> str:
        result = encode(self.payload(), options)
        if result.ok and result.text is not None:
            return result.text

        reason = error_message(result.error)
        logger.warning(
            "envelope.render_degraded",
            extra={"policy": self._policy.name, "json_error": result.error.name},
        )
        self.code(500).status(self._policy.error_status).message("JSON error: :error", {":error": reason})

        # The offending payload is left out of the error report.
        fallback = encode(self._wire({}), options)
        if fallback.text is None:
            raise EnvelopeError(
                "Error envelope could not be encoded",
                error_code="envelope_unencodable",
                reason_code=fallback.error.name.lower(),
            )
        return fallback.text

    def safe_render(self, options: int | None = None) -> str:
        """Render, or describe the failure as text; never raises."""
        try:
            return self.render(options)
        except Exception as exc:
            logger.exception("envelope.render_failed", extra={"policy": self._policy.name})
            return _describe(exc)

    def render_into(
        self,
        carrier: ResponseCarrier,
        options: int | None = None,
        *,
        format_header: str = FORMAT_HEADER,
        format_name: str = FORMAT_NAME,
    ) -> Envelope:
        """
        Write the rendered envelope into an outgoing response.

        Call this last: the body is the envelope as it is at this point. The
        carrier's transport status is not touched; ``code`` stays payload
        metadata.
        """
        carrier.set_body(self.render(options))
        carrier.set_header("Content-Type", CONTENT_TYPE)
        carrier.set_header(format_header, format_name)
        return self
