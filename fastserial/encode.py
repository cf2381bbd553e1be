"""JSON encoding of dataclasses, tagged unions and plain values."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import enum
import json
import math
import typing
from collections.abc import Iterable, Mapping
from typing import Any

METADATA_KEY = "fastserial"

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1

_UNION_ATTR = "__fastserial_union__"
_VARIANTS_ATTR = "__fastserial_variants__"
_VARIANT_ATTR = "__fastserial_variant__"


class Tagging(enum.Enum):
    """How a tagged union writes which variant a value is."""

    EXTERNAL = "external"
    INTERNAL = "internal"
    ADJACENT = "adjacent"
    UNTAGGED = "untagged"


@dataclasses.dataclass(frozen=True)
class _UnionSpec:
    tagging: Tagging
    tag: str | None = None
    content: str | None = None


_EXTERNAL = _UnionSpec(Tagging.EXTERNAL)


def fs_field(
    *,
    rename=None,
    skip=False,
    default=dataclasses.MISSING,
    default_factory=dataclasses.MISSING,
):
    """Declare a dataclass field with an encoded name or as skipped."""
    metadata = {METADATA_KEY: {"rename": rename, "skip": bool(skip)}}
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata
    )


def _field_spec(field: dataclasses.Field) -> tuple[str, bool]:
    """Return the encoded name of a field and whether it is skipped."""
    options = field.metadata.get(METADATA_KEY, {})
    name = options.get("rename") or field.name
    return name, bool(options.get("skip", False))


def fs_variant(cls=None, *, rename=None):
    """Give a union variant class an encoded name other than its own."""

    def apply(target):
        setattr(target, _VARIANT_ATTR, rename or target.__name__)
        return target

    return apply if cls is None else apply(cls)


def _register_variants(target: type) -> None:
    """Record the direct subclasses of a union base in the order they are made."""
    variants: list[type] = []
    setattr(target, _VARIANTS_ATTR, variants)
    previous = vars(target).get("__init_subclass__")

    def hook(sub, **kwargs):
        if previous is not None:
            previous.__func__(sub, **kwargs)
        else:
            super(target, sub).__init_subclass__(**kwargs)
        if target in sub.__bases__:
            variants.append(sub)

    target.__init_subclass__ = classmethod(hook)


def tagged_union(cls=None, *, tag=None, content=None, untagged=False):
    """Mark a base class (or an Enum) as a union whose subclasses are variants."""
    if untagged:
        spec = _UnionSpec(Tagging.UNTAGGED)
    elif tag is not None:
        if content is not None:
            spec = _UnionSpec(Tagging.ADJACENT, tag, content)
        else:
            spec = _UnionSpec(Tagging.INTERNAL, tag)
    else:
        spec = _EXTERNAL

    def apply(target):
        setattr(target, _UNION_ATTR, spec)
        if not issubclass(target, enum.Enum):
            _register_variants(target)
        return target

    return apply if cls is None else apply(cls)


def _variant_name(cls: type) -> str:
    return vars(cls).get(_VARIANT_ATTR) or cls.__name__


def _variant_kind(cls: type) -> str:
    if dataclasses.is_dataclass(cls):
        return "struct"
    if issubclass(cls, tuple):
        return "tuple"
    return "unit"


def _find_union(cls: type) -> tuple[type, _UnionSpec] | None:
    for base in cls.__mro__:
        spec = vars(base).get(_UNION_ATTR)
        if spec is not None:
            return base, spec
    return None


def _fnv1a(text: str) -> int:
    value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK64
    return value


def compute_schema_hash(type_name, fields):
    """Hash a type name and its (name, type) pairs with 64-bit FNV-1a."""
    value = _fnv1a(type_name)
    for field_name, field_type in fields:
        value ^= _fnv1a(field_name)
        value ^= _fnv1a(field_type)
    return value


def _type_name(tp: Any) -> str:
    if isinstance(tp, str):
        return tp
    if typing.get_origin(tp) is None and isinstance(tp, type):
        return tp.__name__
    return repr(tp).replace("typing.", "")


def schema_hash(cls):
    """Return the schema hash of a dataclass, a tagged union or an Enum."""
    if not isinstance(cls, type):
        raise TypeError(f"expected a class, got {cls!r}")
    if issubclass(cls, enum.Enum):
        entries = [(member.name, "unit") for member in cls]
    elif _UNION_ATTR in vars(cls):
        entries = [
            (_variant_name(sub), _variant_kind(sub))
            for sub in vars(cls).get(_VARIANTS_ATTR, [])
        ]
    elif dataclasses.is_dataclass(cls):
        entries = []
        for field in dataclasses.fields(cls):
            name, skip = _field_spec(field)
            if not skip:
                entries.append((name, _type_name(field.type)))
    else:
        raise TypeError(f"{cls.__name__} has no schema")
    return compute_schema_hash(cls.__name__, entries)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_float(number: float) -> str:
    if not math.isfinite(number):
        raise ValueError(f"cannot encode non-finite float {number!r}")
    text = repr(number)
    if "e" in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}e{int(exponent)}"
    return text


def _write_array(items: Iterable[Any], out: list[str]) -> None:
    out.append("[")
    for index, item in enumerate(items):
        if index:
            out.append(",")
        _write(item, out)
    out.append("]")


def _write_struct(value: Any, out: list[str]) -> None:
    out.append("{")
    first = True
    for field in dataclasses.fields(value):
        name, skip = _field_spec(field)
        if skip:
            continue
        out.append(f'"{name}":' if first else f',"{name}":')
        _write(getattr(value, field.name), out)
        first = False
    out.append("}")


def _write_unit(spec: _UnionSpec, name: str, out: list[str]) -> None:
    if spec.tagging is Tagging.EXTERNAL:
        out.append(f'"{name}"')
    elif spec.tagging is Tagging.UNTAGGED:
        out.append("null")
    else:
        out.append(f'{{"{spec.tag}":"{name}"}}')


def _write_tuple_payload(items: tuple, out: list[str]) -> None:
    if len(items) == 1:
        _write(items[0], out)
    else:
        _write_array(items, out)


def _write_variant(value: Any, spec: _UnionSpec, out: list[str]) -> None:
    cls = type(value)
    name = _variant_name(cls)
    kind = _variant_kind(cls)
    tagging = spec.tagging

    if kind == "unit":
        _write_unit(spec, name, out)
        return

    if kind == "struct":
        if tagging is Tagging.EXTERNAL:
            out.append(f'{{"{name}":')
            _write_struct(value, out)
            out.append("}")
        elif tagging is Tagging.INTERNAL:
            out.append(f'{{"{spec.tag}":"{name}"')
            for field in dataclasses.fields(value):
                key, skip = _field_spec(field)
                if skip:
                    continue
                out.append(f',"{key}":')
                _write(getattr(value, field.name), out)
            out.append("}")
        elif tagging is Tagging.ADJACENT:
            out.append(f'{{"{spec.tag}":"{name}","{spec.content}":')
            _write_struct(value, out)
            out.append("}")
        else:
            _write_struct(value, out)
        return

    items = tuple(value)
    if tagging is Tagging.EXTERNAL:
        out.append(f'{{"{name}":')
        _write_tuple_payload(items, out)
        out.append("}")
    elif tagging is Tagging.INTERNAL:
        out.append(f'{{"{spec.tag}":"{name}"}}')
    elif tagging is Tagging.ADJACENT:
        out.append(f'{{"{spec.tag}":"{name}","{spec.content}":')
        _write_tuple_payload(items, out)
        out.append("}")
    else:
        _write_tuple_payload(items, out)


def _write(value: Any, out: list[str]) -> None:
    if value is None:
        out.append("null")
    elif isinstance(value, enum.Enum):
        spec = vars(type(value)).get(_UNION_ATTR, _EXTERNAL)
        _write_unit(spec, value.name, out)
    elif value is True:
        out.append("true")
    elif value is False:
        out.append("false")
    elif isinstance(value, int):
        out.append(str(int(value)))
    elif isinstance(value, float):
        out.append(_format_float(value))
    elif isinstance(value, str):
        out.append(_quote(value))
    elif isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        out.append(_quote(value.isoformat()))
    elif isinstance(value, (bytes, bytearray)):
        _write_array(value, out)
    elif isinstance(value, type):
        raise TypeError(f"cannot encode class {value.__name__}")
    else:
        found = _find_union(type(value))
        if found is not None:
            base, spec = found
            if type(value) is base:
                raise TypeError(f"{base.__name__} is a union, not a variant")
            _write_variant(value, spec, out)
        elif dataclasses.is_dataclass(value):
            _write_struct(value, out)
        elif isinstance(value, Mapping):
            out.append("{")
            for index, (key, item) in enumerate(value.items()):
                if not isinstance(key, str):
                    raise TypeError(f"object keys must be strings, got {key!r}")
                if index:
                    out.append(",")
                out.append(_quote(key))
                out.append(":")
                _write(item, out)
            out.append("}")
        elif isinstance(value, (list, tuple, set, frozenset)):
            _write_array(value, out)
        else:
            raise TypeError(f"cannot encode value of type {type(value).__name__}")


def encode_str(value):
    """Encode a value as a JSON string."""
    out: list[str] = []
    _write(value, out)
    return "".join(out)


def encode(value):
    """Encode a value as UTF-8 JSON bytes."""
    return encode_str(value).encode("utf-8")