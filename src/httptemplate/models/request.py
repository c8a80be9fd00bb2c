# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsed template models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Method(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


VALID_METHODS: frozenset[str] = frozenset(method.value for method in Method)


@dataclass
class ParsedRequest:
    """
    Structured form of a merged request template.

    - `host` comes from the Host header and is never present in `headers`.
    - `headers` keep the names exactly as written in the template.
    - `query_parameters` / `body_parameters` are the raw form-encoded strings used for OAuth1a
      signing; `body` is the full accumulated body sent on the wire.
    """

    method: Method
    path: str
    host: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    has_body: bool = False
    version: str = "1.1"
    query_parameters: str = ""
    body_parameters: str = ""

    @property
    def target(self) -> str:
        """Host followed by path, as written in the template (no scheme normalization)."""
        return f"{self.host}{self.path}"


__all__ = ["Method", "ParsedRequest", "VALID_METHODS"]
