from __future__ import annotations

import logging
from typing import Sequence

from .classifier import classify
from .context_composer import compose
from .css_synthesizer import CssSelectorSynthesizer
from .dom_api import ElementNode, QueryScope
from .models import CompositeLocator, ContextFrame, LocatorResult
from .scoring import css_quality, xpath_quality
from .settings import DEFAULT_SETTINGS, SynthesisSettings
from .xpath_synthesizer import XPathSynthesizer

logger = logging.getLogger(__name__)


def generate_locators(
    node: ElementNode,
    scope: QueryScope,
    settings: SynthesisSettings | None = None,
) -> LocatorResult:
    """Synthesize the CSS selector and XPath for ``node`` within ``scope``.

    Never raises for ambiguous or invalid candidates. When no unique selector
    exists the result carries ``selector_unique=False`` and callers should
    surface it as low confidence.
    """
    config = settings or DEFAULT_SETTINGS
    category = classify(node, config)
    outcome = CssSelectorSynthesizer(scope, config).synthesize(node, category)
    path = XPathSynthesizer(scope, config).synthesize(node, category)

    result = LocatorResult(
        selector=outcome.selector,
        path=path,
        category=category,
        selector_unique=outcome.unique,
        selector_match_count=outcome.match_count,
        selector_quality=css_quality(outcome.selector),
        path_quality=xpath_quality(path),
    )
    logger.debug("Locators for %s element: css=%s xpath=%s", category, result.selector, result.path)
    return result


def generate_context_locators(
    node: ElementNode,
    scope: QueryScope,
    chain: Sequence[ContextFrame] | None = None,
    settings: SynthesisSettings | None = None,
) -> LocatorResult | CompositeLocator:
    """Like ``generate_locators`` but prefixed with a root-first frame/shadow chain.

    ``scope`` must be the innermost sub-document; uniqueness is never
    checked across boundaries.
    """
    return compose(generate_locators(node, scope, settings), chain)
