from __future__ import annotations

from .dom_api import ElementNode
from .models import ElementCategory
from .selector_rules import TEXT_TAGS
from .settings import DEFAULT_SETTINGS, SynthesisSettings


def classify(node: ElementNode, settings: SynthesisSettings | None = None) -> ElementCategory:
    config = settings or DEFAULT_SETTINGS
    tag = node.tag

    if tag in {"input", "textarea"}:
        return "input"
    input_type = (node.attribute("type") or "").strip().lower()
    if tag == "button" or (tag == "input" and input_type in {"button", "submit"}):
        return "button"
    if tag == "a":
        return "link"
    if tag == "select":
        return "select"
    if is_text_element(node, config):
        return "text"
    return "generic"


def is_text_element(node: ElementNode, settings: SynthesisSettings | None = None) -> bool:
    config = settings or DEFAULT_SETTINGS
    if node.tag not in TEXT_TAGS:
        return False

    text = (node.text_content() or "").strip()
    if len(text) <= config.text_min_length:
        return False
    return node.interactive_descendant_count() <= config.text_max_interactive
