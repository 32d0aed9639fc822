from inspectlocator.lxml_dom import LxmlScope
from inspectlocator.validation import count_matches, is_unique, validate_locator


class _ExplodingScope:
    def count_css(self, selector: str) -> int:
        raise ValueError(f"bad selector {selector}")

    def count_xpath(self, expression: str) -> int:
        raise ValueError(f"bad expression {expression}")


def test_evaluation_errors_count_as_zero() -> None:
    scope = _ExplodingScope()

    assert count_matches(scope, "CSS", "#x") == 0
    assert count_matches(scope, "XPath", "//x") == 0
    assert not is_unique(scope, "#x")


def test_invalid_syntax_counts_as_zero_with_real_evaluator() -> None:
    scope = LxmlScope.from_html("<p>a</p>")

    assert count_matches(scope, "CSS", "p[") == 0
    assert count_matches(scope, "XPath", "//p[") == 0


def test_blank_locator_matches_nothing() -> None:
    scope = LxmlScope.from_html("<p>a</p>")

    assert count_matches(scope, "CSS", "   ") == 0


def test_validate_locator_messages() -> None:
    scope = LxmlScope.from_html("<p>a</p><p id='b'>b</p>")

    unique = validate_locator(scope, "CSS", "#b")
    assert unique.unique
    assert unique.message == "Locator is unique in scope."

    missing = validate_locator(scope, "XPath", "//table")
    assert not missing.unique
    assert missing.message == "Locator matches nothing in scope."

    repeated = validate_locator(scope, "CSS", "p")
    assert repeated.match_count == 2
    assert repeated.message == "Locator is not unique in scope (2 matches)."
