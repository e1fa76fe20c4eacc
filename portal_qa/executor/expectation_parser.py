"""Expectation parser: pulls structured values out of expectation strings.

Grammar per action (case-insensitive, surrounding quotes optional):

    check_style    <property> should be <value>
    check_text     text should contain "<value>" | text should be "<value>"
    fill_input     fill with "<value>"
    navigate       navigate to "<value>"

A mismatch raises ``ExpectationParseError`` carrying the required pattern.
The caller turns it into a failed result; it never aborts a run.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from portal_qa.models.scenario import ActionKind

from .errors import ExpectationParseError


@dataclass(frozen=True)
class Grammar:
    pattern: re.Pattern
    usage: str


# A quoted literal runs to the last quote; anything after it is ignored.
# Unquoted literals run to the end of the string.
_LITERAL = r'(?:"(?P<quoted>.*)"|(?P<bare>[^"\s].*?)\s*$)'

GRAMMARS: dict[ActionKind, Grammar] = {
    ActionKind.CHECK_STYLE: Grammar(
        re.compile(r"([a-z-]+)\s+should\s+be\s+(.+)", re.IGNORECASE),
        '"property-name should be value"',
    ),
    ActionKind.CHECK_TEXT: Grammar(
        re.compile(r"text\s+should\s+(?:contain|be)\s+" + _LITERAL, re.IGNORECASE),
        'text should contain "value" or text should be "value"',
    ),
    ActionKind.FILL_INPUT: Grammar(
        re.compile(r"fill\s+with\s+" + _LITERAL, re.IGNORECASE),
        'fill with "value"',
    ),
    ActionKind.NAVIGATE: Grammar(
        re.compile(r"navigate\s+to\s+" + _LITERAL, re.IGNORECASE),
        'navigate to "url"',
    ),
}

_NEGATED_VISIBLE_RE = re.compile(r"\b(?:not\s+(?:be\s+)?visible|invisible)\b", re.IGNORECASE)


def _match(kind: ActionKind, expectation: str) -> re.Match:
    grammar = GRAMMARS[kind]
    match = grammar.pattern.search(expectation.strip())
    if not match:
        raise ExpectationParseError(expectation, grammar.usage)
    return match


def parse_style_expectation(expectation: str) -> tuple[str, str]:
    """Return ``(property, expected_value)``."""
    match = _match(ActionKind.CHECK_STYLE, expectation)
    prop, value = match.group(1).strip().lower(), match.group(2).strip()
    # Allow "... should be 'yellow'." style phrasing
    value = value.rstrip(".").strip().strip("\"'")
    return prop, value


def _literal(match: re.Match) -> str:
    quoted = match.group("quoted")
    return quoted if quoted is not None else match.group("bare")


def parse_text_expectation(expectation: str) -> str:
    return _literal(_match(ActionKind.CHECK_TEXT, expectation))


def parse_fill_value(expectation: str) -> str:
    return _literal(_match(ActionKind.FILL_INPUT, expectation))


def parse_navigation_target(expectation: str) -> str:
    return _literal(_match(ActionKind.NAVIGATE, expectation)).strip()


def expects_visible(expectation: str) -> bool:
    """True when the expectation asks for the element to be present.

    "visible" must appear and must not be negated ("not visible",
    "not be visible", "invisible"). Without "visible" the element is
    expected to be absent, so "hidden" only decides the outcome then.
    """
    if "visible" not in expectation.lower():
        return False
    return not _NEGATED_VISIBLE_RE.search(expectation)


def validate_expectation(kind: ActionKind, expectation: str) -> None:
    """Check an expectation against its action's grammar without running it."""
    if kind in GRAMMARS:
        _match(kind, expectation)
