from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import AbstractSet, Literal, Sequence

from .dom_api import ElementNode, QueryScope
from .locator_generator import generate_context_locators
from .models import CompositeLocator, ContextFrame, LocatorResult
from .settings import SynthesisSettings

logger = logging.getLogger(__name__)

PointerKind = Literal["hover", "click", "context_menu"]
InspectAction = Literal["none", "highlight", "copy_css", "copy_xpath", "show_options"]

MODIFIER_KEYS = frozenset({"ctrl", "alt", "shift"})


@dataclass(frozen=True, slots=True)
class InspectOutcome:
    action: InspectAction
    locators: LocatorResult | CompositeLocator | None = None
    sequence: int = 0

    @property
    def clipboard_text(self) -> str | None:
        if self.locators is None:
            return None
        if self.action == "copy_css":
            return self.locators.selector
        if self.action == "copy_xpath":
            return self.locators.path
        return None


def resolve_action(kind: PointerKind, modifiers: AbstractSet[str], *, active: bool) -> InspectAction:
    if not active:
        return "none"
    pressed = {item.strip().lower() for item in modifiers} & MODIFIER_KEYS

    if kind == "hover":
        return "highlight"
    if kind == "context_menu":
        return "copy_css" if "ctrl" in pressed else "copy_xpath"
    # Priority: ctrl (CSS) > alt (XPath) > shift (both). Plain clicks pass through.
    if "ctrl" in pressed:
        return "copy_css"
    if "alt" in pressed:
        return "copy_xpath"
    if "shift" in pressed:
        return "show_options"
    return "none"


def dispatch_pointer_event(
    node: ElementNode,
    scope: QueryScope,
    *,
    kind: PointerKind,
    active: bool,
    modifiers: AbstractSet[str] = frozenset(),
    chain: Sequence[ContextFrame] | None = None,
    settings: SynthesisSettings | None = None,
    sequence: int = 0,
) -> InspectOutcome:
    action = resolve_action(kind, modifiers, active=active)
    if action == "none":
        return InspectOutcome(action="none", sequence=sequence)

    locators = generate_context_locators(node, scope, chain, settings)
    if locators.soft_failure:
        logger.info("Low-confidence selector for %s event: %s", kind, locators.selector)
    return InspectOutcome(action=action, locators=locators, sequence=sequence)


class LatestEventGate:
    """Last-write-wins bookkeeping for overlapping hover/click events."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, sequence: int) -> bool:
        with self._lock:
            return sequence == self._latest

    def accept(self, outcome: InspectOutcome) -> InspectOutcome | None:
        if not self.is_current(outcome.sequence):
            logger.debug("Dropping stale inspect outcome #%d", outcome.sequence)
            return None
        return outcome
