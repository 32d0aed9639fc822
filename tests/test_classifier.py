from inspectlocator.classifier import classify, is_text_element
from inspectlocator.lxml_dom import LxmlScope
from inspectlocator.settings import SynthesisSettings


def _classify(markup: str, selector: str = "#target") -> str:
    scope = LxmlScope.from_html(markup)
    return classify(scope.find(selector))


def test_form_controls_are_classified_by_tag() -> None:
    assert _classify("<input id='target' type='text'>") == "input"
    assert _classify("<textarea id='target'></textarea>") == "input"
    assert _classify("<button id='target'>Go</button>") == "button"
    assert _classify("<a id='target' href='/x'>x</a>") == "link"
    assert _classify("<select id='target'></select>") == "select"


def test_submit_input_stays_in_input_category() -> None:
    assert _classify("<input id='target' type='submit' value='Send'>") == "input"


def test_short_text_container_is_generic() -> None:
    assert _classify("<div id='target'>Hi</div>") == "generic"
    assert _classify("<div id='target'>abc</div>") == "generic"


def test_text_container_with_nested_text_is_text() -> None:
    assert _classify("<div id='target'><span>Hello world</span></div>") == "text"
    assert _classify("<h2 id='target'>Order summary</h2>") == "text"


def test_text_container_with_many_controls_is_generic() -> None:
    markup = "<div id='target'>Some long label <input><button>x</button></div>"

    assert _classify(markup) == "generic"


def test_non_text_tags_are_generic() -> None:
    assert _classify("<li id='target'>A list entry</li>") == "generic"


def test_text_thresholds_are_configurable() -> None:
    scope = LxmlScope.from_html("<p id='target'>Hello</p>")
    strict = SynthesisSettings(text_min_length=10)

    assert is_text_element(scope.find("#target"))
    assert not is_text_element(scope.find("#target"), strict)


def test_ten_characters_beside_an_unrelated_span_is_text() -> None:
    assert _classify("<div id='target'>Ten chars!<span class='icon'></span></div>") == "text"


def test_text_container_with_one_control_is_still_text() -> None:
    assert _classify("<div id='target'>Name label <input></div>") == "text"
