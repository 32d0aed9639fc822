from __future__ import annotations

from typing import Iterable, Sequence

from .models import CompositeLocator, ContextChain, ContextFrame, FrameworkSnippets, LocatorResult
from .selector_rules import xpath_literal

FRAME_NOTE = "Frame content requires frame switching in automation tools."
XPATH_FRAME_NOTE = "XPath cannot cross frame boundaries; locate the frame first, then evaluate the path inside it."
SHADOW_NOTE = "XPath does not pierce shadow roots; use the CSS selector from inside the host."


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def chain_from_linked(frame: object | None) -> ContextChain:
    """Flatten a child-to-parent linked ancestry into a root-first chain.

    Each link needs ``name`` and ``self_selector`` (or ``selector``) and an
    optional ``parent``; ``kind`` defaults to ``"frame"``.
    """
    frames: list[ContextFrame] = []
    current = frame
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        selector = getattr(current, "self_selector", None) or getattr(current, "selector", "") or ""
        frames.append(
            ContextFrame(
                name=str(getattr(current, "name", "") or ""),
                self_selector=str(selector),
                kind=getattr(current, "kind", "frame") or "frame",
            )
        )
        current = getattr(current, "parent", None)
    frames.reverse()
    return tuple(frames)


def ancestry_path(chain: Sequence[ContextFrame]) -> str:
    return " > ".join(frame.self_selector for frame in chain)


def frame_names(chain: Sequence[ContextFrame]) -> str:
    return " > ".join(frame.name or frame.self_selector for frame in chain)


def frame_xpath(chain: Sequence[ContextFrame]) -> str:
    steps = [
        f"//iframe[@name={xpath_literal(frame.name)}]"
        for frame in chain
        if frame.kind == "frame" and frame.name
    ]
    return "".join(steps)


def selenium_snippet(chain: Sequence[ContextFrame], selector: str) -> str:
    statements = ["driver.switch_to.default_content()"]
    context = "driver"
    for frame in chain:
        lookup = f"{context}.find_element(By.CSS_SELECTOR, {_quote(frame.self_selector)})"
        if frame.kind == "shadow":
            context = f"{lookup}.shadow_root"
            continue
        if context == "driver" and frame.name:
            statements.append(f"driver.switch_to.frame({_quote(frame.name)})")
        else:
            statements.append(f"driver.switch_to.frame({lookup})")
        context = "driver"
    statements.append(f"element = {context}.find_element(By.CSS_SELECTOR, {_quote(selector)})")
    return "; ".join(statements)


def playwright_snippet(chain: Sequence[ContextFrame], selector: str) -> str:
    expression = "page"
    for frame in chain:
        method = "frame_locator" if frame.kind == "frame" else "locator"
        expression += f".{method}({_quote(frame.self_selector)})"
    return f"{expression}.locator({_quote(selector)})"


def shadow_piercing_selector(chain: Sequence[ContextFrame], selector: str) -> str:
    hosts: list[str] = []
    for frame in chain:
        if frame.kind == "frame":
            hosts = []
            continue
        hosts.append(frame.self_selector)
    return " >> ".join([*hosts, selector])


def cypress_snippet(chain: Sequence[ContextFrame], selector: str) -> str:
    expression: str | None = None
    for frame in chain:
        quoted = _quote(frame.self_selector)
        if frame.kind == "frame":
            if expression is None:
                expression = f"cy.iframe({quoted})"
            else:
                expression += f".find({quoted}).its('0.contentDocument.body').then(cy.wrap)"
        elif expression is None:
            expression = f"cy.get({quoted}).shadow()"
        else:
            expression += f".find({quoted}).shadow()"
    if expression is None:
        return f"cy.get({_quote(selector)})"
    return f"{expression}.find({_quote(selector)})"


def build_snippets(chain: Sequence[ContextFrame], selector: str) -> FrameworkSnippets:
    return FrameworkSnippets(
        selenium=selenium_snippet(chain, selector),
        playwright=playwright_snippet(chain, selector),
        shadow_piercing=shadow_piercing_selector(chain, selector),
        cypress=cypress_snippet(chain, selector),
    )


def _notes(chain: Iterable[ContextFrame]) -> tuple[str, ...]:
    kinds = {frame.kind for frame in chain}
    notes: list[str] = []
    if "frame" in kinds:
        notes.extend((FRAME_NOTE, XPATH_FRAME_NOTE))
    if "shadow" in kinds:
        notes.append(SHADOW_NOTE)
    return tuple(notes)


def compose(
    base: LocatorResult,
    chain: Sequence[ContextFrame] | None = None,
) -> LocatorResult | CompositeLocator:
    if not chain:
        return base

    frames: ContextChain = tuple(chain)
    return CompositeLocator(
        selector=base.selector,
        path=base.path,
        chain=frames,
        ancestry_path=ancestry_path(frames),
        frame_names=frame_names(frames),
        frame_xpath=frame_xpath(frames),
        snippets=build_snippets(frames, base.selector),
        base=base,
        notes=_notes(frames),
    )
