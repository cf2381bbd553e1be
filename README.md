# fastserial

JSON encoding and decoding for Python dataclasses, with per-field renaming
and skipping, tagged unions for enum-like types, and a stable 64-bit schema
hash for every encodable type. It has no dependencies beyond the standard
library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Encoding and decoding

Describe your data with ordinary dataclasses. `fs_field` controls how a
field appears on the wire:

```python
from dataclasses import dataclass
from fastserial.encode import fs_field, encode, encode_str, schema_hash
from fastserial.decode import decode, key_count


@dataclass
class Event:
    event_type: str = fs_field(rename="type")
    timestamp: int = 0
    data: str = ""


event = Event("login", 1699999999, '{"user_id": 123}')

text = encode_str(event)      # '{"type":"login","timestamp":1699999999,...}'
raw = encode(event)           # the same document as UTF-8 bytes

restored = decode(raw, Event)
assert restored == event

print(hex(schema_hash(Event)))
print(key_count(Event))       # number of keys the decoder looks for: 3
```

- `fs_field(rename=...)` writes and reads the field under another key.
- `fs_field(skip=True)` leaves the field out of the output. On decoding a
  skipped field takes its `default` or `default_factory`; without either it
  gets an empty value of its type where one can be made, otherwise `None`.
- Keys in the input that no field claims are ignored.
- A field that is neither skipped, present in the input, nor given a default
  raises `MissingFieldError`; malformed JSON, or a value that does not fit
  the field's type, raises `DecodeError` (a `ValueError`).

Besides dataclasses, `encode` handles `None`, booleans, integers, finite
floats (a non-finite float raises `ValueError`), strings, dates and times
(as ISO 8601 strings), `bytes` (as arrays of integers), mappings with string
keys, and lists, tuples and sets. `decode` takes a target type such as a
dataclass, `list[int]`, `dict[str, float]`, `int | None` or an `Enum`, and
reads ISO 8601 strings (including a trailing `Z`) back into `datetime`,
`date` or `time`.

## Tagged unions

`tagged_union` marks a base class (or an `Enum`) as a union; its direct
subclasses become its variants, in the order they are defined. A variant
that is a dataclass is written as an object, one that subclasses `tuple`
as its items, and any other as a unit. `fs_variant(rename=...)` gives a
variant another encoded name. The tagging style follows the `Tagging` enum:

- external (default): `{"Variant": {...}}`, unit variants as `"Variant"`
- internal (`tag="kind"`): `{"kind": "Variant", ...fields}`
- adjacent (`tag="t", content="c"`): `{"t": "Variant", "c": {...}}`
- untagged (`untagged=True`): just the variant's content, unit variants as
  `null`

Enum members are written like unit variants, under their member names.
Unions are written by `encode`; `decode` reads plain `Enum` members by name
but does not read tagged unions back.

`schema_hash` of a union is computed with `compute_schema_hash` from the
type name and each variant's name and shape (`"unit"`, `"struct"` or
`"tuple"`); for a dataclass, from each non-skipped field's encoded name and
type name.

## Ready-made models

`fastserial.models` holds sample documents (`SimpleUser`, `Product`,
`Order`, `BlogPost`, `BatchReport` and their parts such as `Dimensions`,
`Customer`, `Comment`).

`fastserial.appmodels` holds the models of a small blogging API (`User`,
`AuthResponse`, `LoginRequest`, `RegisterRequest`, `Post`, `PostDetail`,
`CreatePostRequest`, `Category`, `CreateCategoryRequest`, `StatsResponse`,
`CategoryStats`) and the `ApiResponse` envelope, built with
`ApiResponse.success(data)` or `ApiResponse.error(message)`; its `ok`
attribute is encoded under the key `success`. `User.password_hash` is
skipped when encoding.

## HTTP helpers

`fastserial.webapi` turns these into HTTP-shaped values:

- `json_response(value)` returns a `Response` (status 200, an
  `application/json` body); if the value cannot be encoded it returns a
  500 `Response` whose body is an `ApiResponse` error.
- `parse_json_body(body, cls)` decodes a request body into a model and
  raises `BadRequest` when it does not fit.
- `AppError` and its subclasses `BadRequest` (400), `Unauthorized` (401),
  `NotFound` (404) and `InternalServerError` (500) turn into an error
  `Response` with their status code through `to_response()`.

A `Response` has `status`, `body`, `content_type` and a `headers` mapping.

## What it does not include

The package is a library only. It installs no command, runs no HTTP
server, and stores nothing: the `webapi` helpers build response values for
a web framework of your choice to send, and there is no benchmark runner
or report page generator.