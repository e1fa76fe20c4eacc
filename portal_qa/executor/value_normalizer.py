"""Value normalizer: canonicalizes colors for style comparisons."""

from __future__ import annotations

import re

# Common CSS color names mapped to their canonical rgb() form.
NAMED_COLORS: dict[str, str] = {
    "yellow": "rgb(255, 255, 0)",
    "blue": "rgb(0, 0, 255)",
    "red": "rgb(255, 0, 0)",
    "green": "rgb(0, 128, 0)",
    "white": "rgb(255, 255, 255)",
    "black": "rgb(0, 0, 0)",
    "gray": "rgb(128, 128, 128)",
    "grey": "rgb(128, 128, 128)",
    "orange": "rgb(255, 165, 0)",
    "purple": "rgb(128, 0, 128)",
    "pink": "rgb(255, 192, 203)",
    "brown": "rgb(165, 42, 42)",
    "cyan": "rgb(0, 255, 255)",
    "magenta": "rgb(255, 0, 255)",
}

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$")
# Channels may be comma- or space-separated; an optional alpha follows "," or "/".
_SEP = r"(?:\s*,\s*|\s+)"
_RGB_RE = re.compile(
    rf"^rgba?\(\s*(\d{{1,3}}){_SEP}(\d{{1,3}}){_SEP}(\d{{1,3}})"
    r"(?:\s*[,/]\s*[\d.]+%?)?\s*\)$"
)


def _canonical(r: int, g: int, b: int) -> str:
    return f"rgb({r}, {g}, {b})"


def parse_color(value: str) -> tuple[int, int, int] | None:
    """Parse a color into an (r, g, b) triple, or None if it is not a color.

    Accepts named colors, 3- and 6-digit hex, rgb() and rgba(). The alpha
    channel of rgba() is discarded.
    """
    value = value.strip().lower()
    if not value:
        return None

    named = NAMED_COLORS.get(value)
    if named:
        value = named

    hex_match = _HEX_RE.match(value)
    if hex_match:
        h = hex_match.group(1)
        if len(h) == 3:
            h = "".join(c * 2 for c in h)
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)

    rgb_match = _RGB_RE.match(value)
    if rgb_match:
        channels = tuple(int(c) for c in rgb_match.groups())
        if all(0 <= c <= 255 for c in channels):
            return channels  # type: ignore[return-value]
    return None


def normalize(value: str) -> str:
    """Return the canonical comparison form of a style value.

    Colors become ``"rgb(r, g, b)"``. Anything else is returned trimmed and
    lowercased so non-color properties still compare as exact strings.
    """
    rgb = parse_color(value)
    if rgb is not None:
        return _canonical(*rgb)
    return value.strip().lower()


def values_match(actual: str, expected: str) -> bool:
    """Compare two style values after normalization."""
    return normalize(actual) == normalize(expected)
