# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import find_header, normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper.

    The response is streamed and read inside the ``stream()`` context, so it is closed exactly
    once whether reading succeeds or not.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if find_header(headers, "User-Agent") is None:
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = (
            request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        )

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=follow_redirects,
            ) as resp:
                return self._read(resp)
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                meta={"error_stage": "send", "error_category": categorize_exception(exc).value},
            )

    @staticmethod
    def _read(resp: httpx.Response) -> HttpResponse:
        base = {
            "status_code": resp.status_code,
            "headers": normalize_headers(resp.headers),
            "url": str(resp.url),
            "reason_phrase": resp.reason_phrase,
            "http_version": resp.http_version,
        }
        try:
            content = resp.read()
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                meta={"error_stage": "read", "error_category": categorize_exception(exc).value},
                **base,
            )

        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")

        return HttpResponse(ok=True, text=text, content=content, **base)

    def close(self) -> None:
        self._client.close()
