"""Accent color parsing."""

import re

OPAQUE_BLACK = (255, 0, 0, 0)


def parse_color_hex(value: str) -> tuple[int, int, int, int]:
    """
    Parse a hex color string into (alpha, red, green, blue).

    Accepts #RGB, #RRGGBB and #AARRGGBB, ignoring leading and trailing
    non-alphanumeric characters. Anything else resolves to opaque black.
    """
    digits = re.sub(r"^[^0-9A-Za-z]+|[^0-9A-Za-z]+$", "", value)
    if not re.fullmatch(r"[0-9A-Fa-f]+", digits):
        return OPAQUE_BLACK
    n = int(digits, 16)

    match len(digits):
        case 3:
            return (255, (n >> 8) * 17, (n >> 4 & 0xF) * 17, (n & 0xF) * 17)
        case 6:
            return (255, n >> 16, n >> 8 & 0xFF, n & 0xFF)
        case 8:
            return (n >> 24, n >> 16 & 0xFF, n >> 8 & 0xFF, n & 0xFF)
        case _:
            return OPAQUE_BLACK


def to_rgb_hex(value: str) -> str:
    """Normalize a color string to #RRGGBB for display."""
    _, r, g, b = parse_color_hex(value)
    return f"#{r:02X}{g:02X}{b:02X}"
