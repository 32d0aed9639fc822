import pytest

from inspectlocator import runtime_checks
from inspectlocator.runtime_checks import (
    _is_missing_browser_error,
    missing_browser_message,
    require_supported_python,
)


def test_is_missing_browser_error_matches_common_messages() -> None:
    errors = [
        RuntimeError("Executable doesn't exist at /path/to/chromium/chrome"),
        RuntimeError(
            "Please run the following command to download new browsers: playwright install"
        ),
        RuntimeError("Failed to launch chromium because executable does not exist"),
    ]

    for error in errors:
        assert _is_missing_browser_error(error)


def test_is_missing_browser_error_ignores_unrelated_errors() -> None:
    error = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
    assert not _is_missing_browser_error(error)


def test_missing_browser_message_names_install_command() -> None:
    message = missing_browser_message(RuntimeError("Executable doesn't exist"))

    assert "-m playwright install chromium" in message
    assert "Executable doesn't exist" in message


def test_require_supported_python_rejects_old_interpreters(monkeypatch: pytest.MonkeyPatch) -> None:
    require_supported_python()

    monkeypatch.setattr(runtime_checks, "MINIMUM_PYTHON", (99, 0))
    with pytest.raises(SystemExit, match="requires Python 99.0"):
        require_supported_python()
