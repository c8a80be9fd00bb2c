# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httptemplate package entrypoint.

Turns plain-text HTTP request templates with ``{{name}}`` placeholders into outbound requests,
optionally signed with OAuth 1.0a (HMAC-SHA1). HTTP behavior is abstracted behind an injectable
client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import DEFAULT_OPTIONS, HttpSettings, RequestOptions, get_options, load_http_settings
from .dispatch import DispatchEngine
from .errors import (
    ErrorCategory,
    HttpTemplateError,
    InvalidMethodError,
    MalformedRequestLineError,
    RequestFailedError,
    ResponseReadError,
    TemplateMergeError,
    TemplateParseError,
    TransportError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import Method, ParsedRequest
from .oauth import OAuthCredentials, sign
from .runtime import HttpTemplate, process_request
from .template import has_merge_variables, merge, parse_request
from .version import __version__

__all__ = [
    "DEFAULT_OPTIONS",
    "DispatchEngine",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpTemplate",
    "HttpTemplateError",
    "HttpxClient",
    "InvalidMethodError",
    "MalformedRequestLineError",
    "Method",
    "OAuthCredentials",
    "ParsedRequest",
    "RequestFailedError",
    "RequestOptions",
    "ResponseReadError",
    "StubHttpClient",
    "TemplateMergeError",
    "TemplateParseError",
    "TransportError",
    "create_default_http_client",
    "get_options",
    "has_merge_variables",
    "load_http_settings",
    "merge",
    "parse_request",
    "process_request",
    "setup_logging",
    "sign",
    "__version__",
]
