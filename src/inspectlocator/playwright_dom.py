from __future__ import annotations

from typing import TYPE_CHECKING, Union

from playwright.sync_api import ElementHandle

from .dom_api import INTERACTIVE_SELECTOR

if TYPE_CHECKING:
    from playwright.sync_api import Frame, Page

    QueryTarget = Union[Page, Frame]

_DIRECT_TEXT_SCRIPT = """
(el) => {
  let text = '';
  for (const node of el.childNodes) {
    if (node.nodeType === Node.TEXT_NODE) {
      text += node.textContent;
    }
  }
  return text;
}
"""

_SIBLING_POSITION_SCRIPT = """
(el) => {
  const parent = el.parentElement || el.parentNode;
  if (!parent || !parent.children) {
    return [1, 1];
  }
  const siblings = Array.from(parent.children).filter((child) => child.tagName === el.tagName);
  return [siblings.indexOf(el) + 1, siblings.length];
}
"""

_SHADOW_COUNT_CSS_SCRIPT = """
(host, selector) => {
  if (!host.shadowRoot) {
    throw new Error('Element has no open shadow root.');
  }
  return host.shadowRoot.querySelectorAll(selector).length;
}
"""

_SHADOW_QUERY_SCRIPT = "(host, selector) => host.shadowRoot && host.shadowRoot.querySelector(selector)"

_SHADOW_COUNT_XPATH_SCRIPT = """
(host, expression) => {
  if (!host.shadowRoot) {
    throw new Error('Element has no open shadow root.');
  }
  const result = document.evaluate(
    expression, host.shadowRoot, null, XPathResult.ORDERED_NODE_SNAPSHOT_TYPE, null
  );
  return result.snapshotLength;
}
"""


class PlaywrightElementNode:
    __slots__ = ("handle", "_tag")

    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle
        self._tag: str | None = None

    def __repr__(self) -> str:
        return f"PlaywrightElementNode(<{self.tag}>)"

    @property
    def tag(self) -> str:
        if self._tag is None:
            self._tag = str(self.handle.evaluate("(el) => el.tagName.toLowerCase()"))
        return self._tag

    @property
    def classes(self) -> list[str]:
        return [str(item) for item in self.handle.evaluate("(el) => Array.from(el.classList || [])")]

    def attribute(self, name: str) -> str | None:
        return self.handle.get_attribute(name)

    def has_attribute(self, name: str) -> bool:
        return bool(self.handle.evaluate("(el, name) => el.hasAttribute(name)", name))

    def text_content(self) -> str:
        return self.handle.text_content() or ""

    def inner_text(self) -> str:
        return str(self.handle.evaluate("(el) => el.innerText || ''"))

    def direct_text(self) -> str:
        return str(self.handle.evaluate(_DIRECT_TEXT_SCRIPT))

    def parent(self) -> PlaywrightElementNode | None:
        parent = self.handle.evaluate_handle("(el) => el.parentElement").as_element()
        if parent is None:
            return None
        return PlaywrightElementNode(parent)

    def children(self) -> list[PlaywrightElementNode]:
        return [PlaywrightElementNode(child) for child in self.handle.query_selector_all(":scope > *")]

    def interactive_descendant_count(self) -> int:
        return int(self.handle.evaluate("(el, selector) => el.querySelectorAll(selector).length", INTERACTIVE_SELECTOR))

    def same_tag_sibling_position(self) -> tuple[int, int]:
        index, count = self.handle.evaluate(_SIBLING_POSITION_SCRIPT)
        return int(index), int(count)


class PlaywrightScope:
    """Scope over a Playwright ``Page`` or ``Frame`` document."""

    def __init__(self, target: QueryTarget) -> None:
        self.target = target

    def count_css(self, selector: str) -> int:
        return len(self.target.query_selector_all(selector))

    def count_xpath(self, expression: str) -> int:
        return self.target.locator(f"xpath={expression}").count()

    def find(self, selector: str) -> PlaywrightElementNode:
        matches = self.target.query_selector_all(selector)
        if len(matches) != 1:
            raise LookupError(f"Expected exactly one element for {selector!r}, found {len(matches)}.")
        return PlaywrightElementNode(matches[0])


class PlaywrightShadowScope:
    """Scope limited to the open shadow root of ``host``."""

    def __init__(self, host: ElementHandle) -> None:
        self.host = host

    def count_css(self, selector: str) -> int:
        return int(self.host.evaluate(_SHADOW_COUNT_CSS_SCRIPT, selector))

    def count_xpath(self, expression: str) -> int:
        return int(self.host.evaluate(_SHADOW_COUNT_XPATH_SCRIPT, expression))

    def find(self, selector: str) -> PlaywrightElementNode:
        count = self.count_css(selector)
        if count != 1:
            raise LookupError(f"Expected exactly one element for {selector!r} in shadow root, found {count}.")
        element = self.host.evaluate_handle(_SHADOW_QUERY_SCRIPT, selector).as_element()
        if element is None:
            raise LookupError(f"Expected exactly one element for {selector!r} in shadow root, found 0.")
        return PlaywrightElementNode(element)
