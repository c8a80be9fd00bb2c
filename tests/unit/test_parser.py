# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from httptemplate.errors import InvalidMethodError, MalformedRequestLineError
from httptemplate.models import Method
from httptemplate.template.parser import (
    extract_body_parameters,
    extract_headers,
    extract_method,
    extract_path,
    extract_query_parameters,
    extract_version,
    parse_request,
)

SEARCH_TEMPLATE = """GET /search?hl=en&output=search&sclient=psy-ab&q={{query}}&btnK= HTTP/1.1
				Host: www.google.com
				User-Agent: Mozilla/5.0 (Macintosh; Intel Mac OS X 10_6_8) AppleWebKit/534.57.2 (KHTML, like Gecko) Version/5.1.7"""

FORM_TEMPLATE = (
    "POST /1.1/statuses/update.json?include_entities=true HTTP/1.1\r\n"
    "Host: api.twitter.com\r\n"
    "Content-Type: application/x-www-form-urlencoded\r\n"
    "\r\n"
    "status=Hello%20Ladies%20%2b%20Gentlemen%2c%20a%20signed%20OAuth%20request%21\r\n"
)


@pytest.mark.parametrize("method", ["GET", "PUT", "POST", "DELETE"])
def test_extract_method_accepts_valid_methods(method):
    assert extract_method(f"{method} /items HTTP/1.1\nHost: example.com") is Method(method)


@pytest.mark.parametrize("token", ["ILLEGAL", "get", "Post", "PATCH", "HEAD"])
def test_extract_method_rejects_other_tokens(token):
    with pytest.raises(InvalidMethodError) as excinfo:
        extract_method(f"{token} /items HTTP/1.1")
    assert excinfo.value.method == token


def test_extract_method_from_indented_template():
    assert extract_method(SEARCH_TEMPLATE) is Method.GET
    with pytest.raises(InvalidMethodError):
        extract_method(SEARCH_TEMPLATE.replace("GET", "ILLEGAL", 1))


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n",
        "GET",
        "GET /path",
        "GET path HTTP/1.1",
        "GET /with space HTTP/1.1",
        "GET /path FTP/1.0",
    ],
)
def test_malformed_request_line_raises(text):
    with pytest.raises(MalformedRequestLineError):
        extract_method(text)
    with pytest.raises(MalformedRequestLineError):
        extract_path(text)


def test_extract_path_and_version():
    assert extract_path(SEARCH_TEMPLATE) == "/search?hl=en&output=search&sclient=psy-ab&q={{query}}&btnK="
    assert extract_version(SEARCH_TEMPLATE) == "1.1"
    assert extract_path("DELETE /a/b%20c/~d HTTP/2") == "/a/b%20c/~d"


def test_leading_blank_lines_are_skipped():
    text = "\n\nPUT /x HTTP/1.1\nHost: h"
    assert extract_method(text) is Method.PUT
    assert extract_path(text) == "/x"


def test_extract_headers_separates_host():
    host, body, headers, has_body = extract_headers(SEARCH_TEMPLATE)
    assert host == "www.google.com"
    assert headers == {
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_6_8) AppleWebKit/534.57.2 (KHTML, like Gecko) Version/5.1.7"
        )
    }
    assert body == ""
    assert has_body is False


def test_extract_headers_host_is_case_insensitive_and_names_keep_case():
    text = "GET / HTTP/1.1\nhOsT: example.com:8080\nX-Custom-ID: 7\naccept: */*"
    host, _, headers, _ = extract_headers(text)
    assert host == "example.com:8080"
    assert headers == {"X-Custom-ID": "7", "accept": "*/*"}
    assert all(name.lower() != "host" for name in headers)


def test_extract_headers_ignores_non_header_lines_before_blank_line():
    text = "GET / HTTP/1.1\nHost: h\nthis is not a header\nAccept: text/plain"
    _, _, headers, has_body = extract_headers(text)
    assert headers == {"Accept": "text/plain"}
    assert has_body is False


def test_extract_headers_accumulates_body_after_blank_line():
    text = 'POST /items HTTP/1.1\nHost: h\nContent-Type: application/json\n\n{"a": 1,\n\n "b": 2}\n'
    host, body, headers, has_body = extract_headers(text)
    assert host == "h"
    assert headers == {"Content-Type": "application/json"}
    assert body == '{"a": 1,\n "b": 2}'
    assert has_body is True


def test_body_lines_are_not_treated_as_headers():
    text = "POST /items HTTP/1.1\nHost: h\n\nNote: this is body text"
    _, body, headers, _ = extract_headers(text)
    assert headers == {}
    assert body == "Note: this is body text"


def test_indented_body_is_dedented_as_a_block():
    text = "POST /x HTTP/1.1\n    Host: h\n\n    line one\n      line two"
    _, body, _, _ = extract_headers(text)
    assert body == "line one\n  line two"


def test_extract_query_parameters():
    assert extract_query_parameters(SEARCH_TEMPLATE) == "hl=en&output=search&sclient=psy-ab&q={{query}}&btnK="
    assert extract_query_parameters("GET /no-query HTTP/1.1") == ""


def test_extract_body_parameters_uses_last_paragraph():
    assert extract_body_parameters(FORM_TEMPLATE) == (
        "status=Hello%20Ladies%20%2b%20Gentlemen%2c%20a%20signed%20OAuth%20request%21"
    )
    text = "POST /x HTTP/1.1\nHost: h\n\nfirst=1\n\nsecond=2\nthird=3\n"
    assert extract_body_parameters(text) == "second=2&third=3"
    assert extract_body_parameters("GET /x HTTP/1.1\nHost: h") == ""


def test_parse_request_builds_parsed_request():
    parsed = parse_request(FORM_TEMPLATE)
    assert parsed.method is Method.POST
    assert parsed.path == "/1.1/statuses/update.json?include_entities=true"
    assert parsed.host == "api.twitter.com"
    assert parsed.headers == {"Content-Type": "application/x-www-form-urlencoded"}
    assert parsed.has_body is True
    assert parsed.body.startswith("status=Hello")
    assert parsed.query_parameters == "include_entities=true"
    assert parsed.body_parameters == parsed.body
    assert parsed.target == "api.twitter.com/1.1/statuses/update.json?include_entities=true"
