# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

HTTP header field names are case-insensitive (RFC 9110), but templates keep the names exactly as
written so the outbound request looks like the text the user authored. These helpers look up and
replace headers without touching the casing of the other entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def find_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Return the key under which ``name`` is stored (any casing), or None."""
    if not headers or not name:
        return None
    if name in headers:
        return name
    lower = name.lower()
    for key in headers:
        if key.lower() == lower:
            return key
    return None


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    key = find_header(headers, name)
    if key is None or headers is None:
        return default
    value = headers.get(key)
    return default if value is None else str(value).strip()


def set_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set ``name`` in place; an existing entry keeps its original casing."""
    existing = find_header(headers, name)
    headers[existing if existing is not None else name] = value


__all__ = ["find_header", "header_value", "normalize_headers", "set_header"]
