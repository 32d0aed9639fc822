from inspectlocator.locator_generator import generate_context_locators, generate_locators
from inspectlocator.lxml_dom import LxmlScope
from inspectlocator.models import CompositeLocator, ContextFrame, LocatorResult
from inspectlocator.settings import SynthesisSettings

PAGE = """
<html><body>
  <header class="site-header"><a href="/">Home</a><a href="/cart">Cart</a></header>
  <main>
    <form id="checkout">
      <input type="email" placeholder="you@example.com" required>
      <input type="text" name="coupon">
      <button type="submit">Place order</button>
    </form>
    <ul class="results">
      <li><span class="badge">Item</span></li>
      <li><span class="badge">Item</span></li>
    </ul>
  </main>
</body></html>
"""


def test_every_pair_resolves_to_the_inspected_element() -> None:
    scope = LxmlScope.from_html(PAGE)
    for target in ("input[type=email]", "input[name=coupon]", "button", "a[href='/cart']"):
        node = scope.find(target)
        result = generate_locators(node, scope)

        assert isinstance(result, LocatorResult)
        assert scope.select_css(result.selector) == [node], target
        assert result.selector_unique
        assert result.selector_quality
        assert result.path_quality


def test_result_carries_category_and_quality() -> None:
    scope = LxmlScope.from_html(PAGE)
    result = generate_locators(scope.find("input[type=email]"), scope)

    assert result.category == "input"
    assert result.selector == '[placeholder="you@example.com"]'
    assert result.selector_quality == "Excellent (Placeholder)"
    assert result.path == '//input[@placeholder="you@example.com"]'


def test_repeated_list_entries_resolve_positionally() -> None:
    scope = LxmlScope.from_html(PAGE)
    node = scope.select_css("ul.results span.badge")[1]

    result = generate_locators(node, scope)

    assert result.selector == "li:nth-of-type(2) > span.badge"
    assert scope.select_css(result.selector) == [node]
    assert result.selector_quality == "Poor (Position-based)"


def test_no_positional_budget_reports_soft_failure() -> None:
    scope = LxmlScope.from_html(PAGE)
    node = scope.select_css("ul.results span.badge")[1]

    result = generate_locators(node, scope, SynthesisSettings(positional_depth=0))

    assert result.soft_failure
    assert result.selector_match_count == 2


def test_context_locators_wrap_base_pair() -> None:
    scope = LxmlScope.from_html(PAGE)
    node = scope.find("button")
    chain = (ContextFrame(name="checkout", self_selector="iframe#checkout-frame"),)

    composite = generate_context_locators(node, scope, chain)

    assert isinstance(composite, CompositeLocator)
    assert composite.base == generate_locators(node, scope)
    assert composite.snippets.playwright == (
        "page.frame_locator('iframe#checkout-frame').locator('button[type=\"submit\"]')"
    )
    assert generate_context_locators(node, scope) == composite.base
