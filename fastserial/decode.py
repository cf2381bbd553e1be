"""JSON decoding into dataclasses and typed containers."""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import datetime as _dt
import enum
import functools
import inspect
import json
import re
import types
import typing
from typing import Any

from .encode import METADATA_KEY

_NONE_TYPE = type(None)

_BASE_NAMES: dict[str, Any] = {
    "None": None,
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "bytes": bytes,
    "bytearray": bytearray,
    "list": list,
    "dict": dict,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "object": object,
    "Any": Any,
    "Optional": typing.Optional,
    "Union": typing.Union,
    "List": typing.List,
    "Dict": typing.Dict,
    "Tuple": typing.Tuple,
    "Set": typing.Set,
    "FrozenSet": typing.FrozenSet,
    "Sequence": collections.abc.Sequence,
    "Mapping": collections.abc.Mapping,
    "Iterable": collections.abc.Iterable,
    "datetime": _dt,
    "typing": typing,
}

_LEXEME = re.compile(r"\.\.\.|[A-Za-z_][\w.]*|[\[\],|]|\S")


class DecodeError(ValueError):
    """Raised when input is not valid JSON or does not fit the target type."""


class MissingFieldError(DecodeError):
    """Raised when a required field is absent from a JSON object."""

    def __init__(self, name: str) -> None:
        super().__init__(f"missing field {name!r}")
        self.name = name


def _namespace(cls: type) -> dict[str, Any]:
    """Names visible to the annotations of a class and its bases."""
    names = dict(_BASE_NAMES)
    for base in reversed(cls.__mro__):
        module = inspect.getmodule(base)
        if module is not None:
            names.update(inspect.getmembers(module))
    names[cls.__name__] = cls
    return names


def _lookup(name: str, namespace: dict[str, Any]) -> Any:
    head, *rest = name.split(".")
    if head not in namespace:
        raise TypeError(f"cannot resolve annotation name {name!r}")
    obj = namespace[head]
    for part in rest:
        members = dict(inspect.getmembers(obj))
        if part not in members:
            raise TypeError(f"cannot resolve annotation name {name!r}")
        obj = members[part]
    return obj


class _AnnotationParser:
    """Turns an annotation string such as 'list[int] | None' into a type."""

    def __init__(self, text: str, namespace: dict[str, Any]) -> None:
        self.text = text
        self.namespace = namespace
        self.lexemes = collections.deque(_LEXEME.findall(text))

    def _fail(self) -> TypeError:
        return TypeError(f"cannot resolve annotation {self.text!r}")

    def _next(self) -> str:
        if not self.lexemes:
            raise self._fail()
        return self.lexemes.popleft()

    def parse(self) -> Any:
        result = self._union()
        if self.lexemes:
            raise self._fail()
        return result

    def _union(self) -> Any:
        parts = [self._primary()]
        while self.lexemes and self.lexemes[0] == "|":
            self.lexemes.popleft()
            parts.append(self._primary())
        return parts[0] if len(parts) == 1 else typing.Union[tuple(parts)]

    def _primary(self) -> Any:
        lexeme = self._next()
        if lexeme == "...":
            return Ellipsis
        if not (lexeme[0].isalpha() or lexeme[0] == "_"):
            raise self._fail()
        obj = _lookup(lexeme, self.namespace)
        if self.lexemes and self.lexemes[0] == "[":
            self.lexemes.popleft()
            args = [self._union()]
            while self.lexemes and self.lexemes[0] == ",":
                self.lexemes.popleft()
                args.append(self._union())
            if self._next() != "]":
                raise self._fail()
            return obj[tuple(args)] if len(args) > 1 else obj[args[0]]
        return obj


@functools.lru_cache(maxsize=None)
def _hints(cls: type) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    namespace: dict[str, Any] | None = None
    for field in dataclasses.fields(cls):
        hint = field.type
        if isinstance(hint, str):
            if namespace is None:
                namespace = _namespace(cls)
            hint = _AnnotationParser(hint, namespace).parse()
        hints[field.name] = hint
    return hints


def _spec(field: dataclasses.Field) -> tuple[str, bool]:
    options = field.metadata.get(METADATA_KEY, {})
    return options.get("rename") or field.name, bool(options.get("skip", False))


def _has_default(field: dataclasses.Field) -> bool:
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
    )


def _fallback_default(hint: Any) -> Any:
    if isinstance(hint, type):
        try:
            return hint()
        except TypeError:
            pass
    return None


def _decode_struct(cls: type, raw: Any) -> Any:
    if not isinstance(raw, dict):
        raise DecodeError(f"expected an object for {cls.__name__}, got {raw!r}")
    hints = _hints(cls)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        name, skip = _spec(field)
        hint = hints.get(field.name, Any)
        if skip:
            if not _has_default(field):
                kwargs[field.name] = _fallback_default(hint)
            continue
        if name in raw:
            kwargs[field.name] = _convert(raw[name], hint)
        elif not _has_default(field):
            raise MissingFieldError(name)
    return cls(**kwargs)


def _parse_iso(value: Any, kind: type) -> Any:
    if not isinstance(value, str):
        raise DecodeError(f"expected an ISO 8601 string, got {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return kind.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"invalid {kind.__name__}: {value!r}") from exc


def _convert_union(value: Any, args: tuple) -> Any:
    if value is None and _NONE_TYPE in args:
        return None
    last: DecodeError | None = None
    for arg in args:
        if arg is _NONE_TYPE:
            continue
        try:
            return _convert(value, arg)
        except DecodeError as exc:
            last = exc
    raise DecodeError(f"value {value!r} fits no member of the union") from last


def _convert_generic(value: Any, origin: Any, args: tuple) -> Any:
    if origin in (list, collections.abc.Sequence, collections.abc.Iterable):
        if not isinstance(value, list):
            raise DecodeError(f"expected an array, got {value!r}")
        item = args[0] if args else Any
        return [_convert(element, item) for element in value]
    if origin in (set, frozenset):
        if not isinstance(value, list):
            raise DecodeError(f"expected an array, got {value!r}")
        item = args[0] if args else Any
        return origin(_convert(element, item) for element in value)
    if origin is tuple:
        if not isinstance(value, list):
            raise DecodeError(f"expected an array, got {value!r}")
        if not args:
            return tuple(value)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_convert(element, args[0]) for element in value)
        if len(args) != len(value):
            raise DecodeError(f"expected {len(args)} items, got {len(value)}")
        return tuple(_convert(element, arg) for element, arg in zip(value, args))
    if origin in (dict, collections.abc.Mapping):
        if not isinstance(value, dict):
            raise DecodeError(f"expected an object, got {value!r}")
        item = args[1] if len(args) == 2 else Any
        return {key: _convert(element, item) for key, element in value.items()}
    if dataclasses.is_dataclass(origin):
        return _decode_struct(origin, value)
    raise TypeError(f"cannot decode into {origin!r}")


def _convert(value: Any, hint: Any) -> Any:
    if hint is Any or isinstance(hint, typing.TypeVar):
        return value
    if hint is None or hint is _NONE_TYPE:
        if value is None:
            return None
        raise DecodeError(f"expected null, got {value!r}")

    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        return _convert_union(value, typing.get_args(hint))
    if origin is not None:
        return _convert_generic(value, origin, typing.get_args(hint))

    if not isinstance(hint, type):
        raise TypeError(f"cannot decode into {hint!r}")
    if issubclass(hint, enum.Enum):
        if isinstance(value, str) and value in hint.__members__:
            return hint[value]
        raise DecodeError(f"{value!r} is not a variant of {hint.__name__}")
    if issubclass(hint, bool):
        if isinstance(value, bool):
            return value
        raise DecodeError(f"expected a boolean, got {value!r}")
    if issubclass(hint, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return hint(value)
        raise DecodeError(f"expected an integer, got {value!r}")
    if issubclass(hint, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return hint(value)
        raise DecodeError(f"expected a number, got {value!r}")
    if issubclass(hint, str):
        if isinstance(value, str):
            return hint(value)
        raise DecodeError(f"expected a string, got {value!r}")
    if issubclass(hint, (_dt.datetime, _dt.date, _dt.time)):
        return _parse_iso(value, hint)
    if issubclass(hint, (bytes, bytearray)):
        if isinstance(value, list) and all(
            isinstance(b, int) and not isinstance(b, bool) and 0 <= b < 256
            for b in value
        ):
            return hint(value)
        raise DecodeError(f"expected an array of bytes, got {value!r}")
    if dataclasses.is_dataclass(hint):
        return _decode_struct(hint, value)
    if hint in (list, dict, tuple, set, frozenset):
        return _convert_generic(value, hint, ())
    if hint is object:
        return value
    raise TypeError(f"cannot decode into {hint.__name__}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def decode(data, cls):
    """Decode JSON bytes or text into a value of the given type."""
    if isinstance(data, (bytearray, memoryview)):
        data = bytes(data)
    try:
        raw = json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return _convert(raw, cls)


def key_count(cls):
    """Return how many keys a dataclass reads when decoded."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"expected a dataclass, got {cls!r}")
    return sum(1 for field in dataclasses.fields(cls) if not _spec(field)[1])