# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level entry points: the ``process_request`` function and the ``HttpTemplate`` facade."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress
from typing import Any

from .config import HttpSettings, RequestOptions, load_http_settings
from .dispatch.engine import DispatchEngine, ResponseCallback
from .http.client import HttpClient, borrowed_client, create_default_http_client


def process_request(
    template: str,
    merge_values: Mapping[str, object] | None = None,
    options: RequestOptions | Mapping[str, Any] | None = None,
    callback: ResponseCallback | None = None,
    *,
    http_client: HttpClient | None = None,
    settings: HttpSettings | None = None,
    debug: bool = False,
) -> str | None:
    """
    Merge, parse, optionally sign and send ``template``; return the response body.

    A fresh transport is created (and closed) for the call unless ``http_client`` is given, in
    which case the caller keeps ownership of it.
    """
    with borrowed_client(http_client, settings) as client:
        return DispatchEngine(client).run(template, merge_values, options, callback, debug=debug)


class HttpTemplate:
    """
    Convenience wrapper that reuses one HTTP client across several template calls.

    Options given here are the defaults for every call; per-call options replace them entirely.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: HttpSettings | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ):
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.options = options
        self.engine = DispatchEngine(self.http_client)

    def process_request(
        self,
        template: str,
        merge_values: Mapping[str, object] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
        callback: ResponseCallback | None = None,
        *,
        debug: bool = False,
    ) -> str | None:
        return self.engine.run(
            template,
            merge_values,
            options if options is not None else self.options,
            callback,
            debug=debug,
        )

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> HttpTemplate:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["HttpTemplate", "process_request"]
