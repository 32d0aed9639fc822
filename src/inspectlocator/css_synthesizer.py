from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Iterable, Iterator

from .classifier import classify
from .dom_api import ElementNode, QueryScope
from .escalator import escalate, positional_fragment
from .models import ElementCategory, SelectorOutcome
from .selector_rules import (
    css_attr,
    escape_css_identifier,
    find_test_id,
    relevant_attributes,
    semantic_classes,
    usable_href,
)
from .settings import DEFAULT_SETTINGS, SynthesisSettings
from .validation import count_matches

logger = logging.getLogger(__name__)


def _attr(node: ElementNode, name: str) -> str | None:
    raw = node.attribute(name)
    if raw is None or not raw.strip():
        return None
    return raw


class CssSelectorSynthesizer:
    """Builds category-specific CSS candidates and picks the first unique one.

    Candidates are produced lazily, so escalation work for lower-ranked
    candidates only happens when every higher-ranked one was ambiguous.
    """

    def __init__(self, scope: QueryScope, settings: SynthesisSettings | None = None) -> None:
        self.scope = scope
        self.settings = settings or DEFAULT_SETTINGS

    def synthesize(self, node: ElementNode, category: ElementCategory | None = None) -> SelectorOutcome:
        kind = category or classify(node, self.settings)
        first: str | None = None
        seen: set[str] = set()

        for candidate in self.candidates(node, kind):
            if not candidate or candidate in seen:
                continue
            seen.add(candidate)
            if first is None:
                first = candidate
            match_count = count_matches(self.scope, "CSS", candidate)
            if match_count == 1:
                logger.debug("Found unique %s selector: %s", kind, candidate)
                return SelectorOutcome(candidate, kind, True, 1)
            logger.debug("Selector not unique: %s (matches %d elements)", candidate, match_count)

        fallback = first or positional_fragment(node)
        match_count = count_matches(self.scope, "CSS", fallback)
        if match_count != 1:
            logger.warning(
                "No unique selector found for %s element. Using fallback: %s (matches %d elements)",
                kind,
                fallback,
                match_count,
            )
        return SelectorOutcome(fallback, kind, match_count == 1, match_count)

    def candidates(self, node: ElementNode, category: ElementCategory) -> Iterator[str]:
        builders = {
            "input": self._input_candidates,
            "button": self._button_candidates,
            "link": self._link_candidates,
            "select": self._select_candidates,
            "text": self._text_candidates,
        }
        return builders.get(category, self._generic_candidates)(node)

    def _resolve(self, node: ElementNode, selector: str, escalation_base: str | None = None) -> str:
        if count_matches(self.scope, "CSS", selector) == 1:
            return selector
        return escalate(node, escalation_base or selector, self.scope, self.settings)

    def _id_candidate(self, node: ElementNode) -> str | None:
        node_id = node.attribute("id")
        if not node_id:
            return None
        return self._resolve(node, f"#{escape_css_identifier(node_id)}")

    def _unique_class(self, node: ElementNode) -> str | None:
        for cls in node.classes:
            if count_matches(self.scope, "CSS", f".{escape_css_identifier(cls)}") == 1:
                return cls
        return None

    def _unique_class_candidate(self, node: ElementNode) -> str | None:
        unique = self._unique_class(node)
        if unique:
            return f".{escape_css_identifier(unique)}"
        return None

    def _semantic_class_candidate(self, node: ElementNode) -> str | None:
        unique = self._unique_class_candidate(node)
        if unique:
            return unique
        semantic = semantic_classes(node.classes, self.settings.semantic_keywords)
        if not semantic:
            return None
        base = f"{node.tag}.{escape_css_identifier(semantic[0])}"
        return escalate(node, base, self.scope, self.settings)

    def _name_candidate(self, node: ElementNode) -> str | None:
        value = node.attribute("name")
        if not value:
            return None
        selector = css_attr("name", value)
        return self._resolve(node, selector, f"{node.tag}{selector}")

    def _test_id_candidate(self, node: ElementNode) -> str | None:
        test_id = find_test_id(node)
        if not test_id:
            return None
        return self._resolve(node, css_attr(*test_id))

    def _attr_candidate(self, node: ElementNode, attr: str) -> str | None:
        value = node.attribute(attr)
        if not value:
            return None
        return self._resolve(node, css_attr(attr, value))

    def _typed_candidate(self, node: ElementNode) -> str | None:
        node_type = node.attribute("type")
        if not node_type:
            return None
        return self._resolve(node, f"{node.tag}{css_attr('type', node_type)}")

    def _combined_attribute_candidate(self, node: ElementNode) -> str | None:
        attributes = relevant_attributes(node)
        if not attributes:
            return None
        combined = node.tag + "".join(css_attr(name, value) for name, value in attributes)
        return self._resolve(node, combined)

    @staticmethod
    def _build_each(node: ElementNode, builders: Iterable[Callable[[ElementNode], str | None]]) -> Iterator[str]:
        for build in builders:
            candidate = build(node)
            if candidate:
                yield candidate

    def _input_candidates(self, node: ElementNode) -> Iterator[str]:
        placeholder = _attr(node, "placeholder")
        if placeholder:
            selector = css_attr("placeholder", placeholder)
            yield self._resolve(node, selector, f"{node.tag}{selector}")

        yield from self._build_each(
            node,
            (self._id_candidate, self._name_candidate, self._unique_class_candidate),
        )

        tag = node.tag
        input_type = node.attribute("type")
        if input_type:
            typed = f"{tag}{css_attr('type', input_type)}"
            yield self._resolve(node, typed)
            if node.has_attribute("required"):
                yield self._resolve(node, f"{typed}[required]")
            max_length = (node.attribute("maxlength") or "").strip()
            if max_length.isdigit() and int(max_length) > 0:
                yield self._resolve(node, f"{typed}{css_attr('maxlength', max_length)}")

        yield from self._build_each(
            node,
            (self._test_id_candidate, partial(self._attr_candidate, attr="aria-label")),
        )

    def _button_candidates(self, node: ElementNode) -> Iterator[str]:
        yield from self._build_each(
            node,
            (
                self._id_candidate,
                self._name_candidate,
                self._typed_candidate,
                self._semantic_class_candidate,
            ),
        )

        # Only reached for <input> when the caller passes category="button"; classify() files it under input.
        value = node.attribute("value")
        if value and node.tag == "input":
            yield self._resolve(node, f"input{css_attr('value', value)}")

        yield from self._build_each(
            node,
            (self._test_id_candidate, partial(self._attr_candidate, attr="aria-label")),
        )

    def _link_candidates(self, node: ElementNode) -> Iterator[str]:
        yield from self._build_each(node, (self._id_candidate,))

        href = usable_href(node)
        if href:
            selector = css_attr("href", href)
            yield self._resolve(node, selector, f"a{selector}")

        yield from self._build_each(
            node,
            (
                self._semantic_class_candidate,
                self._test_id_candidate,
                partial(self._attr_candidate, attr="aria-label"),
                partial(self._attr_candidate, attr="title"),
            ),
        )

    def _select_candidates(self, node: ElementNode) -> Iterator[str]:
        yield from self._build_each(
            node,
            (self._id_candidate, self._name_candidate, self._unique_class_candidate),
        )
        if node.has_attribute("multiple"):
            yield self._resolve(node, "select[multiple]")
        yield from self._build_each(node, (self._test_id_candidate,))

    def _text_candidates(self, node: ElementNode) -> Iterator[str]:
        # Text content matching is left to the XPath synthesizer.
        produced = False
        for candidate in self._build_each(
            node,
            (
                self._id_candidate,
                self._test_id_candidate,
                self._unique_class_candidate,
                self._combined_attribute_candidate,
            ),
        ):
            produced = True
            yield candidate

        if node.classes:
            produced = True
            joined = ".".join(escape_css_identifier(cls) for cls in node.classes)
            yield self._resolve(node, f"{node.tag}.{joined}")

        if not produced:
            yield positional_fragment(node)

    def _generic_candidates(self, node: ElementNode) -> Iterator[str]:
        yield from self._build_each(
            node,
            (
                self._id_candidate,
                self._semantic_class_candidate,
                self._combined_attribute_candidate,
            ),
        )
        yield positional_fragment(node)


def synthesize_selector_outcome(
    node: ElementNode,
    scope: QueryScope,
    settings: SynthesisSettings | None = None,
) -> SelectorOutcome:
    return CssSelectorSynthesizer(scope, settings).synthesize(node)


def synthesize_selector(
    node: ElementNode,
    scope: QueryScope,
    settings: SynthesisSettings | None = None,
) -> str:
    return synthesize_selector_outcome(node, scope, settings).selector
