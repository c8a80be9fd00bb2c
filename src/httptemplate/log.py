# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httptemplate."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("HTTPTEMPLATE_LOG_LEVEL", "WARNING").upper()

# httpx and httpcore log every connection step at DEBUG; keep them quiet unless asked.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None, *, transport_debug: bool | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, effective_level, logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if transport_debug is None:
        transport_debug = os.getenv("HTTPTEMPLATE_LOG_TRANSPORT", "").strip().lower() in {"1", "true", "yes", "on"}
    transport_level = numeric_level if transport_debug else max(numeric_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["TRANSPORT_LOGGERS", "setup_logging"]
