# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httptemplate.

Two layers live here:

- ``HttpSettings``: transport defaults (timeout, user agent, TLS verification), read from
  ``HTTPTEMPLATE_*`` environment variables at call time.
- ``RequestOptions``: the flat, per-call option table a template is processed with. Callers pass
  a string-keyed mapping which is overlaid key by key on ``DEFAULT_OPTIONS``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .version import __version__

DEFAULT_USER_AGENT = f"httptemplate/{__version__}"

_TRUTHY = {"1", "true", "yes", "on"}

OPTION_HTTPS = "https"
OPTION_AUTO_CONTENT_LENGTH = "autoContentLength"
OPTION_OAUTH1A_CONSUMER_KEY = "oauth1a_consumer_key"
OPTION_OAUTH1A_CONSUMER_SECRET = "oauth1a_consumer_secret"
OPTION_OAUTH1A_ACCESS_TOKEN = "oauth1a_access_token"
OPTION_OAUTH1A_ACCESS_TOKEN_SECRET = "oauth1a_access_token_secret"

OAUTH1A_OPTION_KEYS = (
    OPTION_OAUTH1A_CONSUMER_KEY,
    OPTION_OAUTH1A_CONSUMER_SECRET,
    OPTION_OAUTH1A_ACCESS_TOKEN,
    OPTION_OAUTH1A_ACCESS_TOKEN_SECRET,
)

DEFAULT_OPTIONS: Mapping[str, str] = MappingProxyType(
    {
        OPTION_HTTPS: "false",
        OPTION_AUTO_CONTENT_LENGTH: "true",
    }
)


def _float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _bool_option(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


@dataclass
class HttpSettings:
    """HTTP client defaults.

    ``timeout`` is None by default: no deadline is imposed on the transport unless the caller
    (or ``HTTPTEMPLATE_HTTP_TIMEOUT``) sets one.
    """

    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("HTTPTEMPLATE_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("HTTPTEMPLATE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("HTTPTEMPLATE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("HTTPTEMPLATE_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def get_options(options: Mapping[str, Any] | None = None) -> dict[str, str]:
    """Overlay caller options on the defaults; absent keys keep their default value."""
    merged = dict(DEFAULT_OPTIONS)
    if options:
        for key, value in options.items():
            if value is None:
                continue
            merged[str(key)] = value if isinstance(value, str) else _option_text(value)
    return merged


def _option_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class RequestOptions:
    """Immutable per-call request options."""

    https: bool = False
    auto_content_length: bool = True
    oauth1a_consumer_key: str | None = None
    oauth1a_consumer_secret: str | None = None
    oauth1a_access_token: str | None = None
    oauth1a_access_token_secret: str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None) -> RequestOptions:
        """Build options from a flat string-keyed mapping; unknown keys are ignored."""
        merged = get_options(options)
        return cls(
            https=_bool_option(merged[OPTION_HTTPS]),
            auto_content_length=_bool_option(merged[OPTION_AUTO_CONTENT_LENGTH]),
            oauth1a_consumer_key=merged.get(OPTION_OAUTH1A_CONSUMER_KEY),
            oauth1a_consumer_secret=merged.get(OPTION_OAUTH1A_CONSUMER_SECRET),
            oauth1a_access_token=merged.get(OPTION_OAUTH1A_ACCESS_TOKEN),
            oauth1a_access_token_secret=merged.get(OPTION_OAUTH1A_ACCESS_TOKEN_SECRET),
        )

    @property
    def signs_oauth1a(self) -> bool:
        """Signing is triggered by the presence of a consumer key."""
        return self.oauth1a_consumer_key is not None

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"


def coerce_options(options: RequestOptions | Mapping[str, Any] | None) -> RequestOptions:
    """Accept either a ready RequestOptions value or a flat option mapping."""
    if isinstance(options, RequestOptions):
        return options
    return RequestOptions.from_mapping(options)


__all__ = [
    "DEFAULT_OPTIONS",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "OAUTH1A_OPTION_KEYS",
    "OPTION_AUTO_CONTENT_LENGTH",
    "OPTION_HTTPS",
    "OPTION_OAUTH1A_ACCESS_TOKEN",
    "OPTION_OAUTH1A_ACCESS_TOKEN_SECRET",
    "OPTION_OAUTH1A_CONSUMER_KEY",
    "OPTION_OAUTH1A_CONSUMER_SECRET",
    "RequestOptions",
    "coerce_options",
    "get_options",
    "load_http_settings",
]
