"""Dataclass JSON encoding and decoding with schema hashes, tagged unions, sample models and HTTP response helpers."""

__version__ = "0.1.0"