from __future__ import annotations

import logging

from .dom_api import ElementNode, QueryScope
from .selector_rules import (
    css_attr,
    escape_css_identifier,
    find_test_id,
    semantic_classes,
)
from .settings import DEFAULT_SETTINGS, SynthesisSettings
from .validation import count_matches, is_unique

logger = logging.getLogger(__name__)


def escalate(
    node: ElementNode,
    base: str,
    scope: QueryScope,
    settings: SynthesisSettings | None = None,
) -> str:
    config = settings or DEFAULT_SETTINGS
    chain = base
    current = node.parent()
    depth = 0
    skipped = False

    while current is not None and current.tag != "body" and depth < config.semantic_depth:
        fragment = parent_selector(current, config)
        if fragment:
            combinator = " " if skipped else " > "
            chain = f"{fragment}{combinator}{chain}"
            skipped = False
            if is_unique(scope, chain):
                logger.debug("Escalated selector unique at depth %d: %s", depth + 1, chain)
                return chain
        else:
            skipped = True
        current = current.parent()
        depth += 1

    match_count = count_matches(scope, "CSS", chain)
    if match_count != 1:
        logger.debug("Semantic escalation not unique: %s (%d matches)", chain, match_count)
        alternative = escalate_positionally(node, base, scope, config)
        if alternative:
            return alternative

    return chain


def escalate_positionally(
    node: ElementNode,
    base: str,
    scope: QueryScope,
    settings: SynthesisSettings | None = None,
) -> str | None:
    config = settings or DEFAULT_SETTINGS
    chain = base
    current = node.parent()
    depth = 0

    while current is not None and current.tag != "body" and depth < config.positional_depth:
        chain = f"{positional_fragment(current)} > {chain}"
        if is_unique(scope, chain):
            logger.debug("Positional escalation unique at depth %d: %s", depth + 1, chain)
            return chain
        current = current.parent()
        depth += 1

    return None


def parent_selector(node: ElementNode, settings: SynthesisSettings | None = None) -> str | None:
    config = settings or DEFAULT_SETTINGS
    node_id = node.attribute("id")
    if node_id:
        return f"#{escape_css_identifier(node_id)}"

    semantic = semantic_classes(node.classes, config.semantic_keywords)
    if semantic:
        return f".{escape_css_identifier(semantic[0])}"

    role = node.attribute("role")
    if role:
        return css_attr("role", role)

    test_id = find_test_id(node)
    if test_id:
        return css_attr(*test_id)
    return None


def positional_fragment(node: ElementNode) -> str:
    index, count = node.same_tag_sibling_position()
    if count <= 1:
        return node.tag
    return f"{node.tag}:nth-of-type({index})"
