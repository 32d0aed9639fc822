from __future__ import annotations

import sys

MINIMUM_PYTHON = (3, 10)

_MISSING_BROWSER_ERROR_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)


def _is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_ERROR_HINTS)


def require_supported_python() -> None:
    if sys.version_info < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        raise SystemExit(
            f"inspectlocator requires Python {required}+. "
            f"Current interpreter: {sys.executable} (Python {sys.version.split()[0]})"
        )


def missing_browser_message(exc: Exception) -> str:
    return (
        "Playwright browser is not installed for this interpreter. "
        f"Run `{sys.executable} -m playwright install chromium` and retry. ({exc})"
    )
