# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, borrowed_client, create_default_http_client
from .dump import format_request, format_response
from .headers import find_header, header_value, normalize_headers, set_header
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "borrowed_client",
    "create_default_http_client",
    "find_header",
    "format_request",
    "format_response",
    "header_value",
    "normalize_headers",
    "set_header",
]
