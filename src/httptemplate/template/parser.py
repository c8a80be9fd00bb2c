# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request-line and header parser for merged templates.

Accepted shape::

    <METHOD> <path>[?<query>] HTTP/<version>
    <Header-Name>: <value>
    ...
    <blank line>
    <body>

Header lines may be indented (templates are often written as indented triple-quoted literals);
they are trimmed before matching. Everything after the first blank line is body.
"""

from __future__ import annotations

import logging
import re
import textwrap

from ..errors import InvalidMethodError, MalformedRequestLineError
from ..models.request import VALID_METHODS, Method, ParsedRequest

logger = logging.getLogger(__name__)

_REQUEST_LINE_RE = re.compile(
    r"^(?P<method>[A-Za-z]+)\s+(?P<path>/[0-9A-Za-z/_?=&%+.,:;~!$'()*@{}\-]*)\s+HTTP/(?P<version>\S+)$"
)
_HEADER_RE = re.compile(r"^(?P<name>[!#$%&'*+.^_`|~0-9A-Za-z-]+):\s*(?P<value>.*?)\s*$")
_QUERY_RE = re.compile(r"\?(?P<query>\S+)")


def _split_sections(text: str) -> tuple[str, list[str], list[str]]:
    """Split into (request line, header lines, raw body lines)."""
    lines = [line.rstrip("\r") for line in (text or "").split("\n")]
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return "", [], []

    header_lines: list[str] = []
    body_lines: list[str] = []
    in_body = False
    for line in lines[1:]:
        if in_body:
            body_lines.append(line)
        elif not line.strip():
            in_body = True
        else:
            header_lines.append(line.strip())
    return lines[0].strip(), header_lines, body_lines


def _match_request_line(text: str) -> re.Match[str]:
    request_line, _, _ = _split_sections(text)
    if not request_line:
        raise MalformedRequestLineError(request_line, "template has no request line")
    match = _REQUEST_LINE_RE.match(request_line)
    if match is None:
        raise MalformedRequestLineError(request_line)
    return match


def extract_method(text: str) -> Method:
    """Return the request method; only GET, PUT, POST and DELETE (exact case) are accepted."""
    token = _match_request_line(text).group("method")
    if token not in VALID_METHODS:
        raise InvalidMethodError(token)
    return Method(token)


def extract_path(text: str) -> str:
    """Return the path (including any query string) between the method and ``HTTP/``."""
    return _match_request_line(text).group("path")


def extract_version(text: str) -> str:
    """Return the protocol version after ``HTTP/`` on the request line, e.g. ``"1.1"``."""
    return _match_request_line(text).group("version")


def extract_headers(text: str) -> tuple[str, str, dict[str, str], bool]:
    """
    Return ``(host, body, headers, has_body)``.

    Host is matched case-insensitively and kept out of ``headers``; other header names are stored
    as written, later duplicates replacing earlier ones. Header-block lines that are not
    ``Name: value`` are skipped.
    """
    _, header_lines, body_lines = _split_sections(text)

    host = ""
    headers: dict[str, str] = {}
    for line in header_lines:
        match = _HEADER_RE.match(line)
        if match is None:
            logger.debug("Ignoring non-header line in header block: %r", line)
            continue
        name, value = match.group("name"), match.group("value")
        if name.lower() == "host":
            host = value
        else:
            headers[name] = value

    body = _accumulate_body(body_lines)
    return host, body, headers, bool(body)


def _accumulate_body(body_lines: list[str]) -> str:
    if not body_lines:
        return ""
    dedented = textwrap.dedent("\n".join(body_lines))
    return "\n".join(line for line in dedented.split("\n") if line.strip())


def extract_query_parameters(text: str) -> str:
    """Return everything after the first ``?`` on the request line, or ``""``."""
    request_line, _, _ = _split_sections(text)
    match = _QUERY_RE.search(request_line)
    return match.group("query") if match else ""


def extract_body_parameters(text: str) -> str:
    """
    Return the last body paragraph as a form-encoded string, or ``""``.

    A paragraph spread over several lines is joined with ``&``.
    """
    _, _, body_lines = _split_sections(text)
    paragraphs: list[list[str]] = []
    current: list[str] = []
    for line in body_lines:
        if line.strip():
            current.append(line.strip())
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return "&".join(paragraphs[-1]) if paragraphs else ""


def parse_request(text: str) -> ParsedRequest:
    """Parse merged template text into a ParsedRequest."""
    method = extract_method(text)
    host, body, headers, has_body = extract_headers(text)
    return ParsedRequest(
        method=method,
        path=extract_path(text),
        host=host,
        headers=headers,
        body=body,
        has_body=has_body,
        version=extract_version(text),
        query_parameters=extract_query_parameters(text),
        body_parameters=extract_body_parameters(text),
    )


__all__ = [
    "extract_body_parameters",
    "extract_headers",
    "extract_method",
    "extract_path",
    "extract_query_parameters",
    "extract_version",
    "parse_request",
]
