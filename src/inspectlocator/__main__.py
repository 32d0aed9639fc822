from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
import sys
from typing import Sequence

from .locator_generator import generate_context_locators
from .models import CompositeLocator, ContextFrame, ContextKind, LocatorResult
from .runtime_checks import _is_missing_browser_error, missing_browser_message, require_supported_python
from .settings import CONFIG_DIR, CONFIG_PATH, SynthesisSettings, load_settings


def _build_logger(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("inspectlocator.cli")
    library_logger = logging.getLogger("inspectlocator")
    library_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(CONFIG_DIR / "inspectlocator.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        library_logger.addHandler(file_handler)
    except OSError:
        # Fallback to stderr logging if file logger cannot be initialized.
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
        library_logger.addHandler(stream_handler)
    return logger


def _context_arg(kind: ContextKind):
    def parse(raw: str) -> ContextFrame:
        name, separator, selector = raw.partition("=")
        if not separator or not selector.strip():
            raise argparse.ArgumentTypeError(f"Expected NAME=SELECTOR, got {raw!r}.")
        return ContextFrame(name=name.strip(), self_selector=selector.strip(), kind=kind)

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inspectlocator",
        description="Generate a unique CSS selector and XPath for one element.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("file", nargs="?", type=Path, help="Static HTML file to inspect")
    source.add_argument("--url", help="Open URL in Chromium via Playwright and inspect the live page")
    parser.add_argument("--target", required=True, help="CSS selector matching exactly the element to inspect")
    parser.add_argument(
        "--frame",
        dest="chain",
        action="append",
        type=_context_arg("frame"),
        default=[],
        metavar="NAME=SELECTOR",
        help="Frame the element lives in (repeat outermost first)",
    )
    parser.add_argument(
        "--shadow",
        dest="chain",
        action="append",
        type=_context_arg("shadow"),
        metavar="NAME=SELECTOR",
        help="Shadow host the element lives in (repeat outermost first)",
    )
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="Settings JSON file")
    parser.add_argument("--headful", action="store_true", help="Show the browser window in --url mode")
    parser.add_argument("--verbose", action="store_true", help="Log every candidate tried")
    return parser


def _inspect_file(
    path: Path,
    target: str,
    chain: Sequence[ContextFrame],
    settings: SynthesisSettings,
) -> LocatorResult | CompositeLocator:
    from .lxml_dom import LxmlScope

    try:
        scope = LxmlScope.from_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Could not read {path}: {exc}") from exc
    try:
        node = scope.find(target)
    except LookupError as exc:
        raise SystemExit(str(exc)) from exc
    return generate_context_locators(node, scope, chain, settings)


def _inspect_url(
    url: str,
    target: str,
    chain: Sequence[ContextFrame],
    settings: SynthesisSettings,
    *,
    headless: bool,
) -> LocatorResult | CompositeLocator:
    from playwright.sync_api import Error as PlaywrightError, sync_playwright

    from .playwright_dom import PlaywrightScope, PlaywrightShadowScope

    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=headless)
            try:
                page = browser.new_page()
                page.goto(url)
                current = page.main_frame
                scope = PlaywrightScope(current)
                for context in chain:
                    handle = current.query_selector(context.self_selector)
                    if handle is None:
                        raise SystemExit(f"Context {context.name!r} not found: {context.self_selector}")
                    if context.kind == "frame":
                        frame = handle.content_frame()
                        if frame is None:
                            raise SystemExit(f"{context.self_selector} is not a frame element.")
                        current = frame
                        scope = PlaywrightScope(frame)
                    else:
                        scope = PlaywrightShadowScope(handle)

                try:
                    node = scope.find(target)
                except LookupError as exc:
                    raise SystemExit(str(exc)) from exc
                return generate_context_locators(node, scope, chain, settings)
            finally:
                browser.close()
    except PlaywrightError as exc:
        if _is_missing_browser_error(exc):
            raise SystemExit(missing_browser_message(exc)) from exc
        raise


def main(argv: Sequence[str] | None = None) -> int:
    require_supported_python()
    args = build_parser().parse_args(argv)
    logger = _build_logger(verbose=args.verbose)
    state = load_settings(args.config)
    chain = tuple(args.chain or ())

    if args.url:
        logger.info("Inspecting %s in %s", args.target, args.url)
        result = _inspect_url(args.url, args.target, chain, state.synthesis, headless=not args.headful)
    else:
        logger.info("Inspecting %s in %s", args.target, args.file)
        result = _inspect_file(args.file, args.target, chain, state.synthesis)

    if result.soft_failure:
        logger.warning("Selector is not unique in scope: %s", result.selector)
    print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    return 0 if not result.soft_failure else 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
