from __future__ import annotations

from pathlib import Path
from typing import Iterator

from lxml import etree, html
from lxml.cssselect import CSSSelector

INTERACTIVE_TAGS = frozenset({"input", "button", "select", "textarea"})
NON_RENDERED_TAGS = frozenset({"script", "style", "template", "noscript", "head", "title", "meta", "link"})

_string_value = etree.XPath("string()")


def _is_element(item: object) -> bool:
    return isinstance(getattr(item, "tag", None), str)


def _local_tag(element: etree._Element) -> str:
    tag = element.tag
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.lower()


def _is_interactive(element: etree._Element) -> bool:
    tag = _local_tag(element)
    if tag in INTERACTIVE_TAGS:
        return True
    return tag == "a" and element.get("href") is not None


def _is_hidden(element: etree._Element) -> bool:
    if element.get("hidden") is not None:
        return True
    style = (element.get("style") or "").replace(" ", "").lower()
    return "display:none" in style or "visibility:hidden" in style


class LxmlElementNode:
    __slots__ = ("element",)

    def __init__(self, element: etree._Element) -> None:
        self.element = element

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LxmlElementNode):
            return NotImplemented
        return self.element is other.element

    def __hash__(self) -> int:
        return id(self.element)

    def __repr__(self) -> str:
        return f"LxmlElementNode(<{self.tag}>)"

    @property
    def tag(self) -> str:
        return _local_tag(self.element)

    @property
    def classes(self) -> list[str]:
        seen: set[str] = set()
        tokens: list[str] = []
        for token in (self.element.get("class") or "").split():
            if token in seen:
                continue
            seen.add(token)
            tokens.append(token)
        return tokens

    def attribute(self, name: str) -> str | None:
        return self.element.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.element.attrib

    def text_content(self) -> str:
        return str(_string_value(self.element))

    def inner_text(self) -> str:
        return "".join(self._rendered_chunks(self.element))

    def _rendered_chunks(self, element: etree._Element) -> Iterator[str]:
        if _local_tag(element) in NON_RENDERED_TAGS or _is_hidden(element):
            return
        if element.text:
            yield element.text
        for child in element:
            if _is_element(child):
                yield from self._rendered_chunks(child)
            if child.tail:
                yield child.tail

    def direct_text(self) -> str:
        chunks = [self.element.text or ""]
        chunks.extend(child.tail or "" for child in self.element)
        return "".join(chunks)

    def parent(self) -> LxmlElementNode | None:
        parent = self.element.getparent()
        if parent is None:
            return None
        return LxmlElementNode(parent)

    def children(self) -> list[LxmlElementNode]:
        return [LxmlElementNode(child) for child in self.element if _is_element(child)]

    def interactive_descendant_count(self) -> int:
        return sum(
            1
            for descendant in self.element.iterdescendants()
            if _is_element(descendant) and _is_interactive(descendant)
        )

    def same_tag_sibling_position(self) -> tuple[int, int]:
        parent = self.element.getparent()
        if parent is None:
            return 1, 1
        tag = self.tag
        position = parent.index(self.element)
        index = 0
        count = 0
        for offset, sibling in enumerate(parent):
            if not _is_element(sibling) or _local_tag(sibling) != tag:
                continue
            count += 1
            if offset <= position:
                index += 1
        return index, count


class LxmlScope:
    """Whole-document scope over a parsed HTML tree."""

    def __init__(self, root: etree._Element) -> None:
        self.root = root

    @classmethod
    def from_html(cls, markup: str) -> LxmlScope:
        return cls(html.document_fromstring(markup))

    @classmethod
    def from_file(cls, path: Path | str) -> LxmlScope:
        return cls.from_html(Path(path).read_text(encoding="utf-8"))

    def select_css(self, selector: str) -> list[LxmlElementNode]:
        matcher = CSSSelector(selector, translator="html")
        return [LxmlElementNode(element) for element in matcher(self.root)]

    def select_xpath(self, expression: str) -> list[LxmlElementNode]:
        result = self.root.xpath(expression)
        if not isinstance(result, list):
            return []
        return [LxmlElementNode(item) for item in result if _is_element(item)]

    def count_css(self, selector: str) -> int:
        return len(self.select_css(selector))

    def count_xpath(self, expression: str) -> int:
        return len(self.select_xpath(expression))

    def find(self, selector: str) -> LxmlElementNode:
        matches = self.select_css(selector)
        if len(matches) != 1:
            raise LookupError(f"Expected exactly one element for {selector!r}, found {len(matches)}.")
        return matches[0]
