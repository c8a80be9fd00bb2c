# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterable
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class HttpTemplateError(Exception):
    """Base class for every error surfaced by httptemplate."""


class TemplateParseError(HttpTemplateError):
    """The template text contains a placeholder that cannot be parsed."""


class TemplateMergeError(HttpTemplateError):
    """One or more placeholders have no value in the merge context."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(f"Error merging variables in http template: missing {', '.join(self.missing)}")


class InvalidMethodError(HttpTemplateError):
    def __init__(self, method: str):
        self.method = method
        super().__init__(
            f"Invalid request method {method!r} in template, must be one of GET, PUT, POST or DELETE"
        )


class MalformedRequestLineError(HttpTemplateError):
    def __init__(self, line: str, reason: str = "expected '<METHOD> <path> HTTP/<version>'"):
        self.line = line
        super().__init__(f"Malformed request line {line!r}: {reason}")


class TransportError(HttpTemplateError):
    """Network-level failure (DNS, connect, TLS, timeout). Never retried."""

    def __init__(self, message: str, *, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR, url: str | None = None):
        self.category = category
        self.url = url
        super().__init__(message)


class ResponseReadError(HttpTemplateError):
    """The response arrived but its body could not be read."""

    def __init__(self, message: str, *, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RequestFailedError(HttpTemplateError):
    """Non-2xx response; carries the status code and body text."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error in request statuscode {status_code} {body}")


def _exception_chain(exc: BaseException) -> list[BaseException]:
    """Return the causes behind ``exc`` (httpx wraps httpcore which wraps the socket/ssl error)."""
    chain: list[BaseException] = []
    current = exc.__cause__ or exc.__context__
    while current is not None and current not in chain and len(chain) < 8:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ConnectError):
        for cause in _exception_chain(exc):
            if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
                return ErrorCategory.SSL_ERROR
            if isinstance(cause, (socket.gaierror, socket.herror)):
                return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def category_from_name(name: str | None) -> ErrorCategory:
    """Resolve a stored category value (see HttpResponse.meta) back to the enum."""
    if not name:
        return ErrorCategory.UNKNOWN_ERROR
    try:
        return ErrorCategory(name)
    except ValueError:
        return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while sending request",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error while sending request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ErrorCategory",
    "HttpTemplateError",
    "InvalidMethodError",
    "MalformedRequestLineError",
    "RequestFailedError",
    "ResponseReadError",
    "TemplateMergeError",
    "TemplateParseError",
    "TransportError",
    "categorize_exception",
    "category_from_name",
    "error_category_to_reason",
]
