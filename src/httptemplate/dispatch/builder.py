# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn a ParsedRequest plus RequestOptions into a transport-level HttpRequest."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlsplit

from ..config import RequestOptions
from ..errors import MalformedRequestLineError
from ..http.headers import header_value, set_header
from ..http.models import HttpRequest
from ..models.request import ParsedRequest
from ..oauth.credentials import OAuthCredentials
from ..oauth.signer import compute_signature

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def normalize_host(host: str, options: RequestOptions) -> str:
    """Prefix the option-selected scheme unless ``host`` already carries http:// or https://."""
    host = host.strip().rstrip("/")
    if host.lower().startswith(("http://", "https://")):
        return host
    return f"{options.scheme}://{host}"


def _check_port(url: str, host: str) -> None:
    try:
        urlsplit(url).port
    except ValueError as exc:
        raise MalformedRequestLineError(f"Host: {host}", f"invalid port ({exc})") from exc


def is_form_encoded(headers: Mapping[str, str]) -> bool:
    """Bodies take part in the OAuth1a signature only when they are form-encoded."""
    content_type = header_value(headers, "Content-Type")
    if not content_type:
        return True
    return content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE


def build_request(
    parsed: ParsedRequest,
    options: RequestOptions,
    *,
    nonce: str | None = None,
    timestamp: int | None = None,
) -> HttpRequest:
    """
    Assemble the outbound request.

    - The body is attached only when the template has one.
    - With ``auto_content_length`` the Content-Length header is recomputed from the UTF-8 body.
    - With an OAuth1a consumer key the Authorization header is signed over ``host + path``.
    """
    if not parsed.host:
        raise MalformedRequestLineError(f"{parsed.method.value} {parsed.path}", "template has no Host header")

    url = f"{normalize_host(parsed.host, options)}{parsed.path}"
    _check_port(url, parsed.host)
    headers = dict(parsed.headers)
    body: bytes | None = None

    if parsed.has_body:
        body = parsed.body.encode("utf-8")
        if options.auto_content_length:
            set_header(headers, "Content-Length", str(len(body)))

    if options.signs_oauth1a:
        body_params = parsed.body_parameters if parsed.has_body and is_form_encoded(headers) else ""
        credentials = OAuthCredentials.from_options(options, nonce=nonce, timestamp=timestamp)
        signature = compute_signature(url, parsed.query_parameters, body_params, parsed.method.value, credentials)
        set_header(headers, "Authorization", signature.header)

    return HttpRequest(url=url, method=parsed.method.value, headers=headers, body=body)


__all__ = ["FORM_CONTENT_TYPE", "build_request", "is_form_encoded", "normalize_host"]
