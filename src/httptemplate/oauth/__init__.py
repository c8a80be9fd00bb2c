# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""OAuth 1.0a request signing."""

from .credentials import (
    NONCE_ALPHABET,
    NONCE_LENGTH,
    OAUTH_VERSION,
    SIGNATURE_METHOD,
    OAuthCredentials,
    generate_nonce,
)
from .signer import (
    Oauth1aSignature,
    build_authorization_header,
    collect_parameters,
    compute_signature,
    generate_parameter_string,
    generate_signature,
    generate_signature_base_string,
    generate_signing_key,
    normalize_url,
    parse_form_parameters,
    percent_encode,
    sign,
)

__all__ = [
    "NONCE_ALPHABET",
    "NONCE_LENGTH",
    "OAUTH_VERSION",
    "OAuthCredentials",
    "Oauth1aSignature",
    "SIGNATURE_METHOD",
    "build_authorization_header",
    "collect_parameters",
    "compute_signature",
    "generate_nonce",
    "generate_parameter_string",
    "generate_signature",
    "generate_signature_base_string",
    "generate_signing_key",
    "normalize_url",
    "parse_form_parameters",
    "percent_encode",
    "sign",
]
