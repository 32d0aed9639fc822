from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ElementCategory = Literal["input", "button", "link", "select", "text", "generic"]
LocatorType = Literal["CSS", "XPath"]
ContextKind = Literal["frame", "shadow"]


@dataclass(frozen=True, slots=True)
class SelectorOutcome:
    selector: str
    category: ElementCategory
    unique: bool
    match_count: int


@dataclass(frozen=True, slots=True)
class LocatorResult:
    selector: str
    path: str
    category: ElementCategory = "generic"
    selector_unique: bool = True
    selector_match_count: int = 1
    selector_quality: str = ""
    path_quality: str = ""

    @property
    def soft_failure(self) -> bool:
        return not self.selector_unique


@dataclass(frozen=True, slots=True)
class ContextFrame:
    name: str
    self_selector: str
    kind: ContextKind = "frame"


ContextChain = tuple[ContextFrame, ...]


@dataclass(frozen=True, slots=True)
class FrameworkSnippets:
    selenium: str
    playwright: str
    shadow_piercing: str
    cypress: str


@dataclass(frozen=True, slots=True)
class CompositeLocator:
    selector: str
    path: str
    chain: ContextChain
    ancestry_path: str
    frame_names: str
    frame_xpath: str
    snippets: FrameworkSnippets
    base: LocatorResult
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def soft_failure(self) -> bool:
        return self.base.soft_failure
