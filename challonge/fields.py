"""Helpers for pulling typed fields out of decoded JSON objects.

Every accessor removes its key from the object. A missing key is always a
``DecodeError``; what happens to a null or wrong-typed value depends on the
accessor: ``take_int`` and ``take_datetime`` are strict, the rest fall back
to a default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Iterator, TypeVar

from challonge.errors import DecodeError
from challonge.scalars import parse_datetime

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonObject = dict[str, Any]


def as_object(value: Any) -> JsonObject:
    if not isinstance(value, dict):
        raise DecodeError("Expected object", value)
    return value


def take_field(obj: JsonObject, key: str) -> Any:
    try:
        return obj.pop(key)
    except KeyError:
        raise DecodeError("Unexpected absent key", key) from None


def unwrap(value: Any, key: str) -> JsonObject:
    """Strip the single-key wrapper around a resource: ``{"match": {...}}``.

    Returns a copy, so the accessors never mutate the caller's document.
    """
    return dict(as_object(take_field(dict(as_object(value)), key)))


def decode_sequence(value: Any, decode: Callable[[Any], T]) -> list[T]:
    """Decode every element of a JSON array; the first failure aborts."""
    if not isinstance(value, list):
        raise DecodeError("Expected array", value)
    return [decode(item) for item in value]


@dataclass(frozen=True)
class Index(Generic[T]):
    """An ordered, read-only list of decoded records."""

    items: tuple[T, ...] = ()

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def take_str(obj: JsonObject, key: str, default: str = "") -> str:
    value = take_field(obj, key)
    return value if isinstance(value, str) else default


def take_opt_str(obj: JsonObject, key: str) -> str | None:
    value = take_field(obj, key)
    return value if isinstance(value, str) else None


def take_bool(obj: JsonObject, key: str, default: bool = False) -> bool:
    value = take_field(obj, key)
    return value if isinstance(value, bool) else default


def take_int(obj: JsonObject, key: str) -> int:
    value = take_field(obj, key)
    if not _is_int(value):
        raise DecodeError(f"Expected integer for {key}", value)
    return value


def take_int_or(obj: JsonObject, key: str, default: int = 0) -> int:
    value = take_field(obj, key)
    return value if _is_int(value) else default


def take_opt_int(obj: JsonObject, key: str) -> int | None:
    value = take_field(obj, key)
    return value if _is_int(value) else None


def take_str_list(obj: JsonObject, key: str) -> list[str]:
    value = take_field(obj, key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def take_datetime(obj: JsonObject, key: str) -> datetime:
    value = take_field(obj, key)
    if not isinstance(value, str):
        raise DecodeError(f"Expected timestamp for {key}", value)
    try:
        return parse_datetime(value)
    except ValueError:
        raise DecodeError(f"Invalid timestamp for {key}", value) from None


def take_opt_datetime(obj: JsonObject, key: str) -> datetime | None:
    value = take_field(obj, key)
    if value is None:
        return None
    if isinstance(value, str):
        try:
            return parse_datetime(value)
        except ValueError:
            pass
    logger.warning("Ignoring unparseable %s: %r", key, value)
    return None
