"""ValueSet Expansion — filters and pages a precomputed expansion, splices it into the ValueSet.

Invariants:
    - Filter is a case-insensitive substring match on display; code is used only
      when display is absent; entries with neither never match
    - total counts filtered entries BEFORE paging, so it is stable across pages
    - offset past the end yields an empty contains, not an error
    - The stored ValueSet content is never mutated (a shallow copy is returned)
    - identifier and timestamp are injected by the caller: the function stays pure
"""

from datetime import datetime
from typing import Any


def matches_filter(entry: Any, needle: str) -> bool:
    if not isinstance(entry, dict):
        return False
    display = entry.get("display")
    if isinstance(display, str):
        return needle in display.lower()
    code = entry.get("code")
    if isinstance(code, str):
        return needle in code.lower()
    return False


def filter_entries(entries: list[Any], filter_text: str | None) -> list[Any]:
    if not filter_text:
        return list(entries)
    needle = filter_text.lower()
    return [e for e in entries if matches_filter(e, needle)]


def paginate(entries: list[Any], offset: int, count: int) -> list[Any]:
    return entries[offset:offset + count]


def build_expanded_value_set(
    content: dict,
    entries: list[Any],
    *,
    identifier: str,
    timestamp: datetime,
    filter_text: str | None = None,
    offset: int = 0,
    count: int = 100,
) -> dict:
    filtered = filter_entries(entries, filter_text)
    result = dict(content)
    result["expansion"] = {
        "identifier": identifier,
        "timestamp": timestamp.isoformat(),
        "total": len(filtered),
        "offset": offset,
        "parameter": [],
        "contains": paginate(filtered, offset, count),
    }
    return result
