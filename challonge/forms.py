"""Form-field naming used by the service for request bodies.

Request attributes are sent as ``object[field]=value`` pairs, and bulk
creation repeats ``object[][field]`` once per record. The pair lists are
kept ordered; joining and percent-encoding are left to the HTTP layer.
"""

from __future__ import annotations

import re

FieldPairs = list[tuple[str, str]]

_KEY_RE = re.compile(r"^(?P<obj>\w+)(?P<bulk>\[\])?\[(?P<name>\w+)\]$")


def field_key(obj: str, name: str) -> str:
    return f"{obj}[{name}]"


def bulk_key(obj: str, name: str) -> str:
    return f"{obj}[][{name}]"


def render_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1")


def collect(pairs: FieldPairs, obj: str) -> dict[str, str]:
    """Gather ``obj[name]`` pairs into a dict keyed by ``name``."""
    fields: dict[str, str] = {}
    for key, value in pairs:
        m = _KEY_RE.match(key)
        if m and m.group("obj") == obj and not m.group("bulk"):
            fields[m.group("name")] = value
    return fields


def collect_bulk(pairs: FieldPairs, obj: str) -> list[dict[str, str]]:
    """Split ``obj[][name]`` pairs into one dict per record.

    A record ends when one of its field names comes round again.
    """
    records: list[dict[str, str]] = []
    current: dict[str, str] = {}
    for key, value in pairs:
        m = _KEY_RE.match(key)
        if not m or m.group("obj") != obj or not m.group("bulk"):
            continue
        name = m.group("name")
        if name in current:
            records.append(current)
            current = {}
        current[name] = value
    if current:
        records.append(current)
    return records
