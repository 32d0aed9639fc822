from __future__ import annotations

from .selector_rules import is_index_based_xpath, is_positional_css

EXCELLENT = "Excellent"
GOOD = "Good"
FAIR = "Fair"
POOR = "Poor"

_TEST_ID_MARKERS = ("[data-testid=", "[data-test=")


def _has_combinator(selector: str) -> bool:
    quote: str | None = None
    depth = 0
    index = 0
    length = len(selector)
    while index < length:
        char = selector[index]
        index += 1
        if char == "\\":
            # Hex escapes may swallow one trailing whitespace.
            hex_digits = 0
            while index < length and hex_digits < 6 and selector[index] in "0123456789abcdefABCDEF":
                index += 1
                hex_digits += 1
            if hex_digits == 0:
                index += 1
            elif index < length and selector[index].isspace():
                index += 1
            continue
        if quote:
            if char == quote:
                quote = None
            continue
        if char in {"'", '"'}:
            quote = char
        elif char in "[(":
            depth += 1
        elif char in "])":
            depth = max(0, depth - 1)
        elif depth == 0 and (char.isspace() or char in ">+~"):
            return True
    return False


def css_quality(selector: str) -> str:
    value = selector.strip()
    if value.startswith("#") and not _has_combinator(value):
        return f"{EXCELLENT} (ID)"
    if "[placeholder=" in value:
        return f"{EXCELLENT} (Placeholder)"
    if "[name=" in value:
        return f"{GOOD} (Name)"
    if any(marker in value for marker in _TEST_ID_MARKERS):
        return f"{EXCELLENT} (Test ID)"
    if is_positional_css(value):
        return f"{POOR} (Position-based)"
    if value.startswith(".") and not _has_combinator(value):
        return f"{GOOD} (Unique Class)"
    if _has_combinator(value):
        return f"{GOOD} (Hierarchical)"
    if "[type=" in value:
        return f"{FAIR} (Type Attribute)"
    return f"{FAIR} (Attribute-based)"


def xpath_quality(xpath: str) -> str:
    value = xpath.strip()
    if "[@placeholder=" in value:
        return f"{EXCELLENT} (Placeholder)"
    if "[@id=" in value:
        return f"{EXCELLENT} (ID)"
    if "[@name=" in value:
        return f"{GOOD} (Name)"
    if "[@data-testid=" in value or "[@data-test=" in value:
        return f"{EXCELLENT} (Test ID)"
    if "[text()=" in value:
        return f"{GOOD} (Text Content)"
    if "contains(text()" in value:
        return f"{FAIR} (Text Contains)"
    if "[@" in value and not is_index_based_xpath(value):
        return f"{GOOD} (Attribute-based)"
    return f"{POOR} (Position-based)"


def is_low_confidence(quality: str) -> bool:
    return quality.startswith(POOR)
