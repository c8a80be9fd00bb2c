# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed models for parsed templates."""

from .request import VALID_METHODS, Method, ParsedRequest

__all__ = ["Method", "ParsedRequest", "VALID_METHODS"]
