# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
OAuth 1.0a HMAC-SHA1 request signing (RFC 5849, section 3.4).

The steps are exposed individually so each intermediate string (parameter string, signature base
string, signing key) can be checked against a provider's reference values. Everything here is pure
string computation; with a fixed nonce and timestamp the output is deterministic.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, quote, urlsplit

from ..config import RequestOptions, coerce_options
from .credentials import OAuthCredentials

logger = logging.getLogger(__name__)

# RFC 3986 unreserved characters besides ALPHA / DIGIT.
_UNRESERVED = "-._~"
_DEFAULT_PORTS = {"http": 80, "https": 443}
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def percent_encode(value: Any) -> str:
    """Percent-encode ``value`` as UTF-8, leaving only ``A-Za-z0-9-._~`` unescaped (space is %20)."""
    return quote(str(value), safe=_UNRESERVED)


def parse_form_parameters(raw: str) -> list[tuple[str, str]]:
    """Parse a form-encoded string permissively; pairs with a broken %-escape are dropped."""
    if not raw:
        return []
    pairs = "&".join(pair for pair in raw.split("&") if not _BAD_ESCAPE_RE.search(pair))
    return parse_qsl(pairs, keep_blank_values=True, strict_parsing=False)


def collect_parameters(query_params: str, body_params: str, credentials: OAuthCredentials) -> dict[str, str]:
    """
    Merge the protocol parameters with the query and body parameters.

    Within one source the first value of a repeated key wins; body values replace query values.
    """
    params = credentials.oauth_parameters()
    for source in (query_params, body_params):
        seen: set[str] = set()
        for key, value in parse_form_parameters(source):
            key = key.strip()
            if key in seen:
                continue
            seen.add(key)
            params[key] = value.strip()
    return params


def generate_parameter_string(params: Mapping[str, str]) -> str:
    """Sort by key and join the encoded ``key=value`` pairs with ``&``."""
    return "&".join(f"{percent_encode(key)}={percent_encode(params[key])}" for key in sorted(params))


def normalize_url(url: str) -> str:
    """Return scheme://host[:port]/path with query and fragment removed (RFC 5849, 3.4.1.2)."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    return f"{scheme}://{host}{parts.path or '/'}"


def generate_signature_base_string(method: str, url: str, parameter_string: str) -> str:
    return "&".join(
        (
            method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(parameter_string),
        )
    )


def generate_signing_key(credentials: OAuthCredentials) -> str:
    return f"{percent_encode(credentials.consumer_secret)}&{percent_encode(credentials.access_token_secret)}"


def generate_signature(signature_base_string: str, signing_key: str) -> str:
    """Base64(HMAC-SHA1(signing_key, signature_base_string))."""
    digest = hmac.new(signing_key.encode("utf-8"), signature_base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def build_authorization_header(credentials: OAuthCredentials, signature: str) -> str:
    """Assemble the ``Authorization`` value; only the signature is percent-encoded."""
    return (
        f'OAuth oauth_consumer_key="{credentials.consumer_key}", '
        f'oauth_nonce="{credentials.nonce}", '
        f'oauth_signature="{percent_encode(signature)}", '
        f'oauth_signature_method="{credentials.signature_method}", '
        f'oauth_timestamp="{credentials.timestamp}", '
        f'oauth_token="{credentials.access_token}", '
        f'oauth_version="{credentials.version}"'
    )


@dataclass(frozen=True)
class Oauth1aSignature:
    """Every intermediate value of one signing operation."""

    credentials: OAuthCredentials
    parameter_string: str
    base_string: str
    signature: str
    header: str


def compute_signature(
    target_url: str,
    query_params: str,
    body_params: str,
    method: str,
    credentials: OAuthCredentials,
) -> Oauth1aSignature:
    parameter_string = generate_parameter_string(collect_parameters(query_params, body_params, credentials))
    base_string = generate_signature_base_string(method, target_url, parameter_string)
    signature = generate_signature(base_string, generate_signing_key(credentials))
    logger.debug("OAuth1a signature base string: %s", base_string)
    return Oauth1aSignature(
        credentials=credentials,
        parameter_string=parameter_string,
        base_string=base_string,
        signature=signature,
        header=build_authorization_header(credentials, signature),
    )


def sign(
    target_url: str,
    query_params: str,
    body_params: str,
    method: str,
    options: RequestOptions | Mapping[str, Any],
    *,
    nonce: str | None = None,
    timestamp: int | None = None,
) -> str:
    """
    Return the OAuth1a ``Authorization`` header value for a request.

    ``nonce`` and ``timestamp`` are generated fresh unless given (golden-value tests inject both).
    """
    credentials = OAuthCredentials.from_options(coerce_options(options), nonce=nonce, timestamp=timestamp)
    return compute_signature(target_url, query_params, body_params, method, credentials).header


__all__ = [
    "Oauth1aSignature",
    "build_authorization_header",
    "collect_parameters",
    "compute_signature",
    "generate_parameter_string",
    "generate_signature",
    "generate_signature_base_string",
    "generate_signing_key",
    "normalize_url",
    "parse_form_parameters",
    "percent_encode",
    "sign",
]
