# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models passed between the dispatcher and HttpClient implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None  # None follows HttpSettings.allow_redirects


@dataclass
class HttpResponse:
    """
    Transport result.

    ``ok`` reports whether the exchange completed at the transport level; an HTTP 404 is still
    ``ok=True``. Failed exchanges carry ``error_message``/``error_type`` and, in ``meta``, the
    ``error_stage`` (``"send"`` or ``"read"``) and ``error_category``.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    reason_phrase: str = ""
    http_version: str = "HTTP/1.1"
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    @property
    def error_stage(self) -> str | None:
        if self.ok:
            return None
        return str(self.meta.get("error_stage") or "send")
