from __future__ import annotations

import re
from typing import Iterable

from .dom_api import ElementNode

TEST_ID_ATTRS = ("data-testid", "data-test")

RELEVANT_ATTRS = ("type", "role", "data-testid", "data-test", "aria-label", "title")

TEXT_TAGS = frozenset(
    {"p", "h1", "h2", "h3", "h4", "h5", "h6", "span", "div", "article", "section", "header", "footer", "main"}
)

_INDEXED_STEP_PATTERN = re.compile(r"\[\d+\]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_space(value: str | None) -> str:
    if not value:
        return ""
    return _WHITESPACE_PATTERN.sub(" ", str(value)).strip()


def escape_css_identifier(value: str) -> str:
    """Escape ``value`` for use after ``#`` or ``.`` the way ``CSS.escape`` does."""
    escaped: list[str] = []
    length = len(value)
    for index, char in enumerate(value):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif 0x01 <= code <= 0x1F or code == 0x7F:
            escaped.append(f"\\{code:x} ")
        elif index == 0 and char.isdigit() and char.isascii():
            escaped.append(f"\\{code:x} ")
        elif index == 1 and char.isdigit() and char.isascii() and value[0] == "-":
            escaped.append(f"\\{code:x} ")
        elif index == 0 and char == "-" and length == 1:
            escaped.append("\\-")
        elif code >= 0x80 or char in ("-", "_") or (char.isascii() and char.isalnum()):
            escaped.append(char)
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def escape_css_string(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\a ")
        .replace("\r", "\\d ")
    )


def css_attr(name: str, value: str) -> str:
    return f'[{name}="{escape_css_string(value)}"]'


def xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    pieces = value.split('"')
    quoted = [f'"{piece}"' for piece in pieces]
    return "concat(" + ", '\"', ".join(quoted) + ")"


def normalize_xpath_text(text: str) -> str:
    """Trim, entity-escape quotes and markup characters, collapse whitespace."""
    return (
        normalize_space(text)
        .replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def find_test_id(node: ElementNode) -> tuple[str, str] | None:
    for attr in TEST_ID_ATTRS:
        value = node.attribute(attr)
        if value:
            return attr, value
    return None


def relevant_attributes(node: ElementNode) -> list[tuple[str, str]]:
    return [
        (attr, node.attribute(attr) or "")
        for attr in RELEVANT_ATTRS
        if node.has_attribute(attr)
    ]


def usable_href(node: ElementNode) -> str | None:
    href = node.attribute("href")
    if not href or href.strip().lower().startswith("javascript:"):
        return None
    return href


def semantic_classes(classes: Iterable[str], keywords: Iterable[str]) -> list[str]:
    lowered_keywords = tuple(keyword.lower() for keyword in keywords)
    return [
        cls
        for cls in classes
        if cls and any(keyword in cls.lower() for keyword in lowered_keywords)
    ]


def is_index_based_xpath(locator: str) -> bool:
    lowered = locator.strip().lower()
    if "position()" in lowered:
        return True
    return bool(_INDEXED_STEP_PATTERN.search(lowered))


def is_positional_css(locator: str) -> bool:
    lowered = locator.lower()
    return ":nth-child(" in lowered or ":nth-of-type(" in lowered
