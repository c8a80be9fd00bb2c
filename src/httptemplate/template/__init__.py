# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Template merge engine and request parser."""

from .merge import has_merge_variables, merge, placeholder_names
from .parser import (
    extract_body_parameters,
    extract_headers,
    extract_method,
    extract_path,
    extract_query_parameters,
    extract_version,
    parse_request,
)

__all__ = [
    "extract_body_parameters",
    "extract_headers",
    "extract_method",
    "extract_path",
    "extract_query_parameters",
    "extract_version",
    "has_merge_variables",
    "merge",
    "parse_request",
    "placeholder_names",
]
