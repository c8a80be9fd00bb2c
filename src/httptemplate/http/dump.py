# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire-like text dumps of requests and responses for debug logging."""

from __future__ import annotations

from urllib.parse import urlsplit

from .models import HttpRequest, HttpResponse

MASKED_HEADERS = frozenset({"authorization", "proxy-authorization"})
MASK = "<redacted>"


def _header_lines(headers: dict[str, str] | None, *, mask: bool) -> list[str]:
    lines = []
    for name, value in (headers or {}).items():
        if mask and name.lower() in MASKED_HEADERS:
            value = MASK
        lines.append(f"{name}: {value}")
    return lines


def _body_text(body: bytes | str | None) -> str:
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def format_request(request: HttpRequest, *, mask_credentials: bool = True) -> str:
    """Render ``request`` as request-line, Host, headers, blank line, body."""
    parts = urlsplit(request.url)
    target = parts.path or "/"
    if parts.query:
        target = f"{target}?{parts.query}"

    lines = [f"{request.method} {target} HTTP/1.1", f"Host: {parts.netloc}"]
    lines.extend(_header_lines(request.headers, mask=mask_credentials))
    lines.append("")
    lines.append(_body_text(request.body))
    return "\n".join(lines)


def format_response(response: HttpResponse) -> str:
    """Render ``response`` as status line, headers, blank line, body (or the transport error)."""
    if response.status_code is None:
        return f"<no response: {response.error_type or 'error'}: {response.error_message or ''}>"

    status_line = f"{response.http_version} {response.status_code}"
    if response.reason_phrase:
        status_line = f"{status_line} {response.reason_phrase}"
    lines = [status_line]
    lines.extend(_header_lines(response.headers, mask=False))
    lines.append("")
    lines.append(response.text)
    return "\n".join(lines)


__all__ = ["MASK", "format_request", "format_response"]
