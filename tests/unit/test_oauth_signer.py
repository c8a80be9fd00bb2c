# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import re

from httptemplate.config import RequestOptions
from httptemplate.oauth.credentials import NONCE_ALPHABET, OAuthCredentials, generate_nonce
from httptemplate.oauth.signer import (
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

FIXED_NONCE = "abcdefghijklmnopqrstuvwxyz012345"
FIXED_TIMESTAMP = 1700000000

BASIC_OPTIONS = {
    "oauth1a_consumer_key": "ck",
    "oauth1a_consumer_secret": "cs",
    "oauth1a_access_token": "tk",
    "oauth1a_access_token_secret": "ts",
}

# Reference values from Twitter's "Creating a signature" walkthrough.
TWITTER_CREDENTIALS = OAuthCredentials.create(
    "xvz1evFS4wEEPTGEFPHBog",
    "kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw",
    "370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb",
    "LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE",
    nonce="kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg",
    timestamp=1318622958,
)
TWITTER_URL = "https://api.twitter.com/1.1/statuses/update.json?include_entities=true"
TWITTER_QUERY = "include_entities=true"
TWITTER_BODY = "status=Hello%20Ladies%20%2b%20Gentlemen%2c%20a%20signed%20OAuth%20request%21"


def test_generate_nonce_is_32_alphanumerics_and_fresh():
    nonces = {generate_nonce() for _ in range(20)}
    assert len(nonces) == 20
    for nonce in nonces:
        assert len(nonce) == 32
        assert set(nonce) <= set(NONCE_ALPHABET)
    assert len(NONCE_ALPHABET) == 62


def test_credentials_default_nonce_and_timestamp(monkeypatch):
    monkeypatch.setattr("httptemplate.oauth.credentials.time.time", lambda: 1234.9)
    creds = OAuthCredentials.from_options(RequestOptions.from_mapping(BASIC_OPTIONS))
    assert creds.timestamp == 1234
    assert len(creds.nonce) == 32
    assert creds.signature_method == "HMAC-SHA1"
    assert creds.version == "1.0"


def test_percent_encode_follows_rfc3986():
    assert percent_encode("AZaz09-._~") == "AZaz09-._~"
    assert percent_encode("a b+c/d=e&f*") == "a%20b%2Bc%2Fd%3De%26f%2A"
    assert percent_encode("☃") == "%E2%98%83"


def test_parse_form_parameters_is_permissive():
    assert parse_form_parameters("") == []
    assert parse_form_parameters("a=1&b=&c&&d=x%20y") == [("a", "1"), ("b", ""), ("c", ""), ("d", "x y")]
    assert parse_form_parameters("a=1&b=%zz") == [("a", "1")]
    assert parse_form_parameters("%g1=x&c=100%&d=%41") == [("d", "A")]


def test_parameter_string_sorts_keys():
    assert generate_parameter_string({"b": "2", "a": "1"}) == "a=1&b=2"
    assert generate_parameter_string({"a": "1", "b": "2"}) == "a=1&b=2"
    assert generate_parameter_string({"k": "v w"}) == "k=v%20w"


def test_collect_parameters_body_overrides_query_and_first_value_wins():
    creds = OAuthCredentials.create("ck", "cs", "tk", "ts", nonce=FIXED_NONCE, timestamp=FIXED_TIMESTAMP)
    params = collect_parameters("a=1&a=2&b=q", " b = body &c=3", creds)
    assert params["a"] == "1"
    assert params["b"] == "body"
    assert params["c"] == "3"
    assert params["oauth_consumer_key"] == "ck"
    assert params["oauth_timestamp"] == str(FIXED_TIMESTAMP)
    assert "oauth_signature" not in params


def test_normalize_url():
    assert normalize_url("http://api.example.com/1/endpoint?x=1#frag") == "http://api.example.com/1/endpoint"
    assert normalize_url("HTTPS://API.Example.com:443/a") == "https://api.example.com/a"
    assert normalize_url("http://example.com:80") == "http://example.com/"
    assert normalize_url("http://example.com:1234/search") == "http://example.com:1234/search"


def test_twitter_reference_signature():
    signature = compute_signature(TWITTER_URL, TWITTER_QUERY, TWITTER_BODY, "post", TWITTER_CREDENTIALS)
    assert signature.parameter_string == (
        "include_entities=true&oauth_consumer_key=xvz1evFS4wEEPTGEFPHBog"
        "&oauth_nonce=kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg&oauth_signature_method=HMAC-SHA1"
        "&oauth_timestamp=1318622958&oauth_token=370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb"
        "&oauth_version=1.0&status=Hello%20Ladies%20%2B%20Gentlemen%2C%20a%20signed%20OAuth%20request%21"
    )
    assert signature.base_string.startswith("POST&https%3A%2F%2Fapi.twitter.com%2F1.1%2Fstatuses%2Fupdate.json&")
    assert generate_signing_key(TWITTER_CREDENTIALS) == (
        "kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw&LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE"
    )
    assert signature.signature == "hCtSmYh+iHYCEqBWrE7C7hYmtUk="
    assert 'oauth_signature="hCtSmYh%2BiHYCEqBWrE7C7hYmtUk%3D"' in signature.header


def test_golden_signature_for_basic_credentials():
    header = sign(
        "http://api.example.com/1/endpoint",
        "",
        "",
        "GET",
        BASIC_OPTIONS,
        nonce=FIXED_NONCE,
        timestamp=FIXED_TIMESTAMP,
    )
    assert header == (
        'OAuth oauth_consumer_key="ck", oauth_nonce="abcdefghijklmnopqrstuvwxyz012345", '
        'oauth_signature="3OKse4B10rbNM6Yf6cSWiOoVTfM%3D", oauth_signature_method="HMAC-SHA1", '
        'oauth_timestamp="1700000000", oauth_token="tk", oauth_version="1.0"'
    )


def test_signature_steps_match_golden_value():
    creds = OAuthCredentials.create("ck", "cs", "tk", "ts", nonce=FIXED_NONCE, timestamp=FIXED_TIMESTAMP)
    parameter_string = generate_parameter_string(collect_parameters("", "", creds))
    base_string = generate_signature_base_string("get", "http://api.example.com/1/endpoint", parameter_string)
    assert base_string == (
        "GET&http%3A%2F%2Fapi.example.com%2F1%2Fendpoint&oauth_consumer_key%3Dck"
        "%26oauth_nonce%3Dabcdefghijklmnopqrstuvwxyz012345%26oauth_signature_method%3DHMAC-SHA1"
        "%26oauth_timestamp%3D1700000000%26oauth_token%3Dtk%26oauth_version%3D1.0"
    )
    assert generate_signature(base_string, generate_signing_key(creds)) == "3OKse4B10rbNM6Yf6cSWiOoVTfM="


def test_sign_is_deterministic_with_fixed_nonce_and_timestamp():
    kwargs = {"nonce": FIXED_NONCE, "timestamp": FIXED_TIMESTAMP}
    first = sign("http://h/p?x=1", "x=1", "y=2", "POST", BASIC_OPTIONS, **kwargs)
    second = sign("http://h/p?x=1", "x=1", "y=2", "POST", RequestOptions.from_mapping(BASIC_OPTIONS), **kwargs)
    assert first == second


def test_sign_ignores_pairs_with_broken_escapes():
    kwargs = {"nonce": FIXED_NONCE, "timestamp": FIXED_TIMESTAMP}
    clean = sign("http://h/p", "x=1", "y=2", "POST", BASIC_OPTIONS, **kwargs)
    noisy = sign("http://h/p", "x=1&q=%zz", "y=2&z=5%", "POST", BASIC_OPTIONS, **kwargs)
    assert noisy == clean


def test_sign_generates_fresh_nonce_per_call():
    first = sign("http://h/p", "", "", "GET", BASIC_OPTIONS)
    second = sign("http://h/p", "", "", "GET", BASIC_OPTIONS)
    nonce_re = re.compile(r'oauth_nonce="([0-9A-Za-z]{32})"')
    assert nonce_re.search(first).group(1) != nonce_re.search(second).group(1)
