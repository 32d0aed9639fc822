from __future__ import annotations

from dataclasses import dataclass
import logging

from .dom_api import QueryScope
from .models import LocatorType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocatorValidation:
    unique: bool
    match_count: int
    message: str


def count_matches(scope: QueryScope, locator_type: LocatorType, locator: str) -> int:
    """Match count of ``locator`` in ``scope``; any evaluator failure counts as 0."""
    text = str(locator or "").strip()
    if not text:
        return 0

    try:
        if locator_type == "CSS":
            return int(scope.count_css(text))
        if locator_type == "XPath":
            return int(scope.count_xpath(text))
    except Exception as exc:
        logger.debug("%s evaluation failed for %r: %s", locator_type, text, exc)
        return 0

    return 0


def is_unique(scope: QueryScope, locator: str, locator_type: LocatorType = "CSS") -> bool:
    return count_matches(scope, locator_type, locator) == 1


def validate_locator(scope: QueryScope, locator_type: LocatorType, locator: str) -> LocatorValidation:
    match_count = count_matches(scope, locator_type, locator)
    if match_count == 1:
        return LocatorValidation(True, match_count, "Locator is unique in scope.")
    if match_count == 0:
        return LocatorValidation(False, match_count, "Locator matches nothing in scope.")
    return LocatorValidation(False, match_count, f"Locator is not unique in scope ({match_count} matches).")
