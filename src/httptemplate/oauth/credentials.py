# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""OAuth1a credential set and nonce generation."""

from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass

from ..config import RequestOptions

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
NONCE_LENGTH = 32
NONCE_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Return a fresh alphanumeric nonce drawn from a CSPRNG."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class OAuthCredentials:
    """Credentials for a single signing operation; nonce and timestamp are never reused."""

    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str
    nonce: str
    timestamp: int
    signature_method: str = SIGNATURE_METHOD
    version: str = OAUTH_VERSION

    @classmethod
    def create(
        cls,
        consumer_key: str,
        consumer_secret: str,
        access_token: str,
        access_token_secret: str,
        *,
        nonce: str | None = None,
        timestamp: int | None = None,
    ) -> OAuthCredentials:
        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
            nonce=nonce if nonce is not None else generate_nonce(),
            timestamp=timestamp if timestamp is not None else int(time.time()),
        )

    @classmethod
    def from_options(
        cls,
        options: RequestOptions,
        *,
        nonce: str | None = None,
        timestamp: int | None = None,
    ) -> OAuthCredentials:
        """Build credentials from request options; absent values sign as empty strings."""
        return cls.create(
            options.oauth1a_consumer_key or "",
            options.oauth1a_consumer_secret or "",
            options.oauth1a_access_token or "",
            options.oauth1a_access_token_secret or "",
            nonce=nonce,
            timestamp=timestamp,
        )

    def oauth_parameters(self) -> dict[str, str]:
        """The protocol parameters that take part in the signature."""
        return {
            "oauth_version": self.version,
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self.nonce,
            "oauth_signature_method": self.signature_method,
            "oauth_timestamp": str(self.timestamp),
            "oauth_token": self.access_token,
        }


__all__ = [
    "NONCE_ALPHABET",
    "NONCE_LENGTH",
    "OAUTH_VERSION",
    "OAuthCredentials",
    "SIGNATURE_METHOD",
    "generate_nonce",
]
