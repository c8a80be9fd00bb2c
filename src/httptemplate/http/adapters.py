# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and dry runs.

    Responses are keyed by URL, optionally narrowed by method (``add(url, resp, method="POST")``).
    Every request is recorded in ``requests``.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        *,
        default: HttpResponse | None = None,
    ):
        self._responses: dict[tuple[str | None, str], HttpResponse] = {
            (None, url): resp for url, resp in (responses or {}).items()
        }
        self._default = default
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        self._responses[(method.upper() if method else None, url)] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for key in ((request.method.upper(), request.url), (None, request.url)):
            if key in self._responses:
                return self._responses[key]
        if self._default is not None:
            return self._default
        return HttpResponse(
            ok=False,
            url=request.url,
            error_message=f"No stubbed response configured for {request.method} {request.url}",
            error_type="StubMiss",
            meta={"error_stage": "send"},
        )

    def close(self) -> None:
        self.closed = True


__all__ = ["StubHttpClient"]
