# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dispatch engine: merge, parse, sign, send and interpret a single request template."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..config import RequestOptions, coerce_options
from ..errors import (
    HttpTemplateError,
    RequestFailedError,
    ResponseReadError,
    TransportError,
    categorize_exception,
    category_from_name,
    error_category_to_reason,
)
from ..http.client import HttpClient
from ..http.dump import format_request, format_response
from ..http.models import HttpRequest, HttpResponse
from ..template.merge import has_merge_variables, merge
from ..template.parser import parse_request
from .builder import build_request

logger = logging.getLogger(__name__)

# A callback may raise, or return an exception to have it raised for it; any other result is ignored.
ResponseCallback = Callable[[HttpResponse | None, HttpTemplateError | None], BaseException | None]


def _response_error(request: HttpRequest, response: HttpResponse) -> HttpTemplateError | None:
    """Map a failed transport exchange to the matching typed error."""
    if response.ok:
        return None
    if response.error_stage == "read":
        return ResponseReadError(
            f"Error reading response body: {response.error_message}",
            status_code=response.status_code,
        )
    category = category_from_name(response.meta.get("error_category"))
    return TransportError(
        f"{error_category_to_reason(category)}: {response.error_message}",
        category=category,
        url=request.url,
    )


class DispatchEngine:
    """Runs one template through merge, parse, optional signing and exactly one transport call."""

    def __init__(self, http_client: HttpClient):
        self.http_client = http_client

    def prepare(
        self,
        template: str,
        merge_values: Mapping[str, object] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
        *,
        nonce: str | None = None,
        timestamp: int | None = None,
    ) -> HttpRequest:
        """Build the outbound request without sending it. All template errors surface here."""
        request_options = coerce_options(options)
        text = template
        if has_merge_variables(text):
            text = merge(text, merge_values)
        parsed = parse_request(text)
        return build_request(parsed, request_options, nonce=nonce, timestamp=timestamp)

    def send(self, request: HttpRequest) -> HttpResponse:
        try:
            return self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                meta={"error_stage": "send", "error_category": categorize_exception(exc).value},
            )

    def run(
        self,
        template: str,
        merge_values: Mapping[str, object] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
        callback: ResponseCallback | None = None,
        *,
        debug: bool = False,
    ) -> str | None:
        """
        Process a template and return the response body.

        Without a callback: transport failures raise TransportError, unreadable bodies raise
        ResponseReadError and non-2xx statuses raise RequestFailedError.

        With a callback: ``callback(response, error)`` decides what the outcome means and this
        method returns None. ``response`` is None when nothing was received. An exception the callback
        returns is raised here.
        """
        request = self.prepare(template, merge_values, options)
        if debug:
            logger.info("REQUEST\n%s", format_request(request))

        response = self.send(request)
        if debug:
            logger.info("RESPONSE\n%s", format_response(response))

        error = _response_error(request, response)
        if callback is not None:
            received = None if error is not None and response.status_code is None else response
            outcome = callback(received, error)
            if isinstance(outcome, BaseException):
                raise outcome
            return None

        if error is not None:
            raise error
        if not response.is_success:
            raise RequestFailedError(response.status_code or 0, response.text)
        return response.text


__all__ = ["DispatchEngine", "ResponseCallback"]
