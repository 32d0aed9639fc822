from __future__ import annotations

from dataclasses import dataclass
import logging

from .classifier import classify
from .dom_api import ElementNode, QueryScope
from .models import ElementCategory
from .selector_rules import (
    find_test_id,
    normalize_space,
    normalize_xpath_text,
    usable_href,
    xpath_literal,
)
from .settings import DEFAULT_SETTINGS, SynthesisSettings
from .validation import count_matches

logger = logging.getLogger(__name__)

TEXT_DRIVEN_CATEGORIES = frozenset({"button", "link", "text"})


@dataclass(frozen=True, slots=True)
class TextAnalysis:
    effective: str
    direct: str

    @property
    def has_direct_text(self) -> bool:
        return bool(self.direct)

    @property
    def has_nested_text(self) -> bool:
        return not self.direct and bool(self.effective)


def direct_text(node: ElementNode) -> str:
    return normalize_space(node.direct_text())


def effective_text(node: ElementNode) -> str:
    own = direct_text(node)
    if own:
        return own

    text_children = [
        child
        for child in node.children()
        if (child.text_content() or "").strip() and child.interactive_descendant_count() == 0
    ]
    if len(text_children) == 1:
        child_text = normalize_space(text_children[0].text_content())
        if child_text:
            return child_text

    rendered = normalize_space(node.inner_text())
    if rendered:
        return rendered
    return normalize_space(node.text_content())


def analyze_text(node: ElementNode) -> TextAnalysis:
    return TextAnalysis(effective=effective_text(node), direct=direct_text(node))


def exact_text_xpath(tag: str, text: str) -> str:
    return f'//{tag}[text()="{normalize_xpath_text(text)}"]'


def contains_text_xpath(tag: str, text: str) -> str:
    return f'//{tag}[contains(text(),"{normalize_xpath_text(text)}")]'


def attribute_xpath(tag: str, attr: str, value: str) -> str:
    return f"//{tag}[@{attr}={xpath_literal(value)}]"


def is_text_unique(node: ElementNode, text: str, scope: QueryScope | None) -> bool:
    if scope is None:
        return False
    return count_matches(scope, "XPath", exact_text_xpath(node.tag, text)) == 1


class XPathSynthesizer:
    def __init__(self, scope: QueryScope | None = None, settings: SynthesisSettings | None = None) -> None:
        self.scope = scope
        self.settings = settings or DEFAULT_SETTINGS

    def synthesize(self, node: ElementNode, category: ElementCategory | None = None) -> str:
        kind = category or classify(node, self.settings)
        if kind in TEXT_DRIVEN_CATEGORIES:
            text_xpath = self._text_xpath(node, kind)
            if text_xpath:
                return text_xpath
        return self._attribute_xpath(node, kind)

    def _text_xpath(self, node: ElementNode, category: ElementCategory) -> str | None:
        config = self.settings
        tag = node.tag
        analysis = analyze_text(node)
        text = analysis.effective
        if not text:
            return None

        logger.debug(
            "Text analysis for %s: direct=%r effective=%r",
            category,
            analysis.direct,
            analysis.effective,
        )

        if category == "text":
            if len(text) <= config.exact_text_limit and is_text_unique(node, text, self.scope):
                return exact_text_xpath(tag, text)
            if len(text) > config.exact_text_limit:
                return contains_text_xpath(tag, text[: config.long_text_prefix])
            return contains_text_xpath(tag, text)

        if analysis.has_direct_text:
            if category == "button":
                return exact_text_xpath(tag, analysis.direct)
            if category == "link" and len(analysis.direct) < config.link_direct_text_limit:
                return contains_text_xpath(tag, analysis.direct)
            return None

        if len(text) <= config.nested_text_limit:
            return contains_text_xpath(tag, text)
        return contains_text_xpath(tag, text[: config.nested_text_prefix])

    def _attribute_xpath(self, node: ElementNode, category: ElementCategory) -> str:
        tag = node.tag
        if category == "input":
            placeholder = node.attribute("placeholder")
            if placeholder and placeholder.strip():
                return attribute_xpath(tag, "placeholder", placeholder)
            priority = ("name", "id")
        else:
            priority = ("id", "name")

        for attr in priority:
            value = node.attribute(attr)
            if value:
                return attribute_xpath(tag, attr, value)

        test_id = find_test_id(node)
        if test_id:
            return attribute_xpath(tag, *test_id)

        class_value = node.attribute("class")
        if class_value and class_value.strip():
            return attribute_xpath(tag, "class", class_value)

        node_type = node.attribute("type")
        if node_type:
            return attribute_xpath(tag, "type", node_type)

        if category == "link":
            href = usable_href(node)
            if href:
                return attribute_xpath(tag, "href", href)

        return positional_xpath(node)


def positional_xpath(node: ElementNode) -> str:
    steps: list[str] = []
    current: ElementNode | None = node
    while current is not None:
        index, count = current.same_tag_sibling_position()
        steps.append(f"{current.tag}[{index}]" if count > 1 else current.tag)
        current = current.parent()
    steps.reverse()
    return "/" + "/".join(steps)


def synthesize_path(
    node: ElementNode,
    scope: QueryScope | None = None,
    settings: SynthesisSettings | None = None,
) -> str:
    return XPathSynthesizer(scope, settings).synthesize(node)
