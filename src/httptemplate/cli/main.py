# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httptemplate CLI: send a request template file and print the response body."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from ..config import OAUTH1A_OPTION_KEYS, OPTION_HTTPS, HttpSettings, load_http_settings
from ..errors import HttpTemplateError
from ..log import setup_logging
from ..runtime import process_request

OAUTH_ENV_PREFIX = "HTTPTEMPLATE_"


def _key_value(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    return name.strip(), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httptemplate",
        description="Merge, sign and send a plain-text HTTP request template",
    )
    parser.add_argument("template", help="Path to the request template, or '-' to read stdin")
    parser.add_argument(
        "--var",
        dest="variables",
        action="append",
        type=_key_value,
        default=[],
        metavar="NAME=VALUE",
        help="Merge variable for a {{NAME}} placeholder (repeatable)",
    )
    parser.add_argument(
        "--option",
        dest="options",
        action="append",
        type=_key_value,
        default=[],
        metavar="KEY=VALUE",
        help="Request option such as https=true or oauth1a_consumer_key=... (repeatable)",
    )
    parser.add_argument("--https", action="store_true", help="Use https:// when the Host header has no scheme")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log the outgoing request and the response (Authorization is masked)",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Transport timeout in seconds")
    return parser


def read_template(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def collect_options(args: argparse.Namespace) -> dict[str, str]:
    """OAuth1a options from the environment, overridden by --option, then --https."""
    options: dict[str, str] = {}
    for key in OAUTH1A_OPTION_KEYS:
        value = os.getenv(f"{OAUTH_ENV_PREFIX}{key.upper()}")
        if value is not None:
            options[key] = value
    options.update(dict(args.options))
    if args.https:
        options[OPTION_HTTPS] = "true"
    return options


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("INFO" if args.debug else None)

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.timeout is not None:
        settings.timeout = args.timeout

    try:
        template = read_template(args.template)
    except OSError as exc:
        print(f"error: cannot read template {args.template}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        body = process_request(
            template,
            dict(args.variables),
            collect_options(args),
            settings=settings,
            debug=args.debug,
        )
    except HttpTemplateError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(body or "")
    if body and not body.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
