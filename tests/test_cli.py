from contextlib import contextmanager
import json
from pathlib import Path

import playwright.sync_api
from playwright.sync_api import Error as PlaywrightError
import pytest

from inspectlocator import __main__ as cli

PAGE = (
    "<html><body><form id='login'><button id='save'>Save</button><span>a</span><span>a</span></form>"
    "<p><b>x</b></p><p><b>x</b></p></body></html>"
)


@pytest.fixture()
def page_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(cli, "CONFIG_DIR", tmp_path / "home")
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


def _run(page_file: Path, *extra: str) -> list[str]:
    return [str(page_file), "--config", str(page_file.parent / "missing.json"), *extra]


def test_cli_prints_locator_json(page_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(_run(page_file, "--target", "#save"))

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["selector"] == "#save"
    assert payload["path"] == '//button[text()="Save"]'
    assert payload["category"] == "button"


def test_cli_builds_context_chain_in_flag_order(page_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(
        _run(page_file, "--target", "#save", "--frame", "app=#app-frame", "--shadow", "widget=my-widget")
    )

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["ancestry_path"] == "#app-frame > my-widget"
    assert [item["kind"] for item in payload["chain"]] == ["frame", "shadow"]
    assert payload["snippets"]["playwright"] == (
        "page.frame_locator('#app-frame').locator('my-widget').locator('#save')"
    )


def test_cli_positional_selector_is_still_unique(page_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(_run(page_file, "--target", "span:nth-of-type(2)"))

    payload = json.loads(capsys.readouterr().out)
    assert payload["selector"] == "span:nth-of-type(2)"
    assert payload["selector_quality"] == "Poor (Position-based)"
    assert exit_code == 0


def test_cli_exit_code_flags_soft_failure(page_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(_run(page_file, "--target", "p:nth-of-type(2) > b"))

    payload = json.loads(capsys.readouterr().out)
    assert payload["selector"] == "b"
    assert payload["selector_unique"] is False
    assert payload["selector_match_count"] == 2
    assert exit_code == 2


def test_cli_rejects_ambiguous_target(page_file: Path) -> None:
    with pytest.raises(SystemExit, match="found 2"):
        cli.main(_run(page_file, "--target", "span"))


def test_cli_rejects_malformed_context(page_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(_run(page_file, "--target", "#save", "--frame", "no-separator"))

    assert excinfo.value.code == 2


def test_cli_reports_missing_browser(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    class _FakeChromium:
        def launch(self, headless: bool = True) -> None:
            raise PlaywrightError("Executable doesn't exist at /ms-playwright/chromium/chrome")

    class _FakePlaywright:
        chromium = _FakeChromium()

    @contextmanager
    def _fake_sync_playwright():
        yield _FakePlaywright()

    monkeypatch.setattr(cli, "CONFIG_DIR", tmp_path / "home")
    monkeypatch.setattr(playwright.sync_api, "sync_playwright", _fake_sync_playwright)

    with pytest.raises(SystemExit, match="playwright install chromium"):
        cli.main(["--url", "https://example.org", "--target", "#save", "--config", str(tmp_path / "none.json")])
