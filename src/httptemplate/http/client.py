# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests.

    Implementations return an HttpResponse for every outcome, including network failures
    (``ok=False``); they do not raise for transport errors.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


@contextmanager
def borrowed_client(
    http_client: HttpClient | None = None,
    settings: HttpSettings | None = None,
) -> Iterator[HttpClient]:
    """
    Yield ``http_client`` untouched, or a fresh default client that is closed on exit.

    Callers that pass their own client keep ownership of it.
    """
    if http_client is not None:
        yield http_client
        return

    client = create_default_http_client(settings)
    try:
        yield client
    finally:
        client.close()


__all__ = ["HttpClient", "borrowed_client", "create_default_http_client"]
