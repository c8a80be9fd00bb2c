# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Placeholder merge engine.

Placeholders are ``{{name}}``; ``{{ name }}`` and the dotted ``{{.name}}`` form are accepted as
well. The whole template (request line, headers and body) is merged in one pass before any
structural parsing, so the host, the path and the body may all depend on merged values.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from ..errors import TemplateMergeError, TemplateParseError

_MERGE_VARIABLES_RE = re.compile(r"\{\{.+\}\}")
_PLACEHOLDER_RE = re.compile(r"\{\{(?P<expression>[^{}\n]*)\}\}")
_NAME_RE = re.compile(r"^\s*\.?(?P<name>[A-Za-z_][A-Za-z0-9_-]*)\s*$")


def has_merge_variables(text: str) -> bool:
    """Return True when ``text`` contains at least one ``{{...}}`` sequence."""
    return bool(_MERGE_VARIABLES_RE.search(text or ""))


def placeholder_names(text: str) -> list[str]:
    """Return the placeholder names referenced by ``text`` in order of first appearance."""
    names: list[str] = []
    for match in _PLACEHOLDER_RE.finditer(text or ""):
        name = _placeholder_name(match.group("expression"))
        if name not in names:
            names.append(name)
    return names


def _placeholder_name(expression: str) -> str:
    match = _NAME_RE.match(expression)
    if match is None:
        raise TemplateParseError(f"Error parsing http template: invalid placeholder {{{{{expression}}}}}")
    return match.group("name")


def _check_delimiters(text: str) -> None:
    leftover = _PLACEHOLDER_RE.sub("", text)
    index = leftover.find("{{")
    if index >= 0:
        snippet = leftover[index : index + 24].splitlines()[0]
        raise TemplateParseError(f"Error parsing http template: unterminated placeholder near {snippet!r}")


def merge(text: str, context: Mapping[str, object] | None) -> str:
    """
    Substitute every placeholder in ``text`` with its value from ``context``.

    Raises TemplateParseError for malformed placeholders and TemplateMergeError when a name has no
    value. Substituted values are inserted verbatim and are not scanned again.
    """
    _check_delimiters(text)
    names = placeholder_names(text)
    values = context or {}
    missing = [name for name in names if name not in values]
    if missing:
        raise TemplateMergeError(missing)

    def _substitute(match: re.Match[str]) -> str:
        value = values[_placeholder_name(match.group("expression"))]
        return "" if value is None else str(value)

    return _PLACEHOLDER_RE.sub(_substitute, text)


__all__ = ["has_merge_variables", "merge", "placeholder_names"]
