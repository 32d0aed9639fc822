from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

INTERACTIVE_SELECTOR = "input, button, select, textarea, a[href]"


@runtime_checkable
class ElementNode(Protocol):
    @property
    def tag(self) -> str:
        """Lower-case tag name."""

    @property
    def classes(self) -> list[str]:
        """Class tokens in document order."""

    def attribute(self, name: str) -> str | None:
        """Raw attribute value, ``None`` when absent."""

    def has_attribute(self, name: str) -> bool: ...

    def text_content(self) -> str:
        """Aggregate text of the node and all descendants."""

    def inner_text(self) -> str:
        """Rendered text; hidden and script content excluded."""

    def direct_text(self) -> str:
        """Concatenation of the node's immediate text-node children."""

    def parent(self) -> ElementNode | None: ...

    def children(self) -> Sequence[ElementNode]: ...

    def interactive_descendant_count(self) -> int:
        """Number of nodes below this one matching ``INTERACTIVE_SELECTOR``."""

    def same_tag_sibling_position(self) -> tuple[int, int]:
        """``(index, count)``: 1-based index among siblings with the same tag."""


@runtime_checkable
class QueryScope(Protocol):
    """Document or sub-document a locator is evaluated against.

    Implementations may raise on invalid expressions or a torn-down scope;
    ``validation.count_matches`` turns any failure into a zero count.
    """

    def count_css(self, selector: str) -> int: ...

    def count_xpath(self, expression: str) -> int: ...
