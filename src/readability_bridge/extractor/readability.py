# src/readability_bridge/extractor/readability.py
from __future__ import annotations

import json
import logging
import os
from importlib.resources import files
from pathlib import Path
from typing import Any, Final, Iterator, Optional

from playwright.async_api import Page, Route

from ..errors import ExtractionError, ScriptResourceError
from .article import ExtractedArticle, ReadabilityOptions, ReaderableOptions
from .constants import DATA_DIR_ENV, DEFAULT_TIMEOUT_S, SCRIPT_DIR_ENV

logger = logging.getLogger(__name__)

READABILITY_JS: Final[str] = "Readability.js"
READERABLE_JS: Final[str] = "Readability-readerable.js"

_ASSET_DIR: Final[str] = "assets"
_NODE_MODULES_DIR: Final[Path] = Path("node_modules") / "@mozilla" / "readability"


def user_data_dir() -> Path:
    """npm prefix used by `setup --install`; $READABILITY_BRIDGE_DATA_DIR overrides it."""
    env_dir = os.getenv(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".local" / "share" / "readability-bridge"


def _candidate_paths(name: str, script_dir: Optional[Path]) -> Iterator[Any]:
    env_dir = os.getenv(SCRIPT_DIR_ENV)
    if script_dir is not None:
        yield Path(script_dir) / name
    elif env_dir:
        yield Path(env_dir) / name
    yield files("readability_bridge.extractor").joinpath(_ASSET_DIR).joinpath(name)
    yield user_data_dir() / _NODE_MODULES_DIR / name
    yield Path.cwd() / _NODE_MODULES_DIR / name


def load_script(name: str, script_dir: Optional[Path] = None) -> str:
    """
    Return the verbatim source of a vendored Readability script.

    Looks in ``script_dir`` (or $READABILITY_BRIDGE_SCRIPT_DIR), then the
    package assets, then the per-user install made by `setup --install`,
    then ./node_modules/@mozilla/readability.
    """
    for path in _candidate_paths(name, script_dir):
        if path.is_file():
            logger.debug("loading %s from %s", name, path)
            return path.read_text(encoding="utf-8")
    raise ScriptResourceError(
        f"{name} not found; run `readability-bridge setup --install` "
        f"or set {SCRIPT_DIR_ENV}"
    )


def make_injection_script(script_dir: Optional[Path] = None) -> str:
    """
    JS snippet that ensures Readability and isProbablyReaderable are
    available in page context.
    """
    code = load_script(READERABLE_JS, script_dir) + "\n" + load_script(READABILITY_JS, script_dir)

    # We inject via a <script> tag to avoid CSP 'eval' issues.
    return f"""
(() => {{
    if (!window.Readability) {{
        const s = document.createElement('script');
        s.type = 'text/javascript';
        s.text = {json.dumps(code)};
        document.documentElement.appendChild(s);
    }}
}})();
"""


def decode_article(raw: Any) -> Optional[ExtractedArticle]:
    """Decode the JSON string produced by ``Readability.parse()``."""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ExtractionError(f"Readability returned invalid JSON: {exc}") from exc
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ExtractionError(f"Readability returned {type(data).__name__}, expected an object")
    return ExtractedArticle.from_dict(data)


class Readability:
    """Runs the vendored Readability.js inside a Playwright page."""

    def __init__(
        self,
        page: Page,
        options: Optional[ReadabilityOptions] = None,
        script_dir: Optional[Path] = None,
    ):
        self.page = page
        self.options = options or ReadabilityOptions()
        self.script_dir = script_dir

    async def inject(self) -> None:
        loaded = await self.page.evaluate(
            "typeof window.Readability === 'function' "
            "&& typeof window.isProbablyReaderable === 'function' ? 1 : 0"
        )
        if loaded == 1:
            return
        await self.page.evaluate(make_injection_script(self.script_dir))

    async def is_probably_readerable(self, options: Optional[ReaderableOptions] = None) -> bool:
        await self.inject()
        opts = json.dumps((options or ReaderableOptions()).to_js())
        result = await self.page.evaluate(f"isProbablyReaderable(document, {opts}) ? 1 : 0")
        return result == 1

    async def parse(self, options: Optional[ReadabilityOptions] = None) -> Optional[ExtractedArticle]:
        """
        Extract the article from the page's current document.

        Readability mutates the document it is given, so it runs on a clone.
        Returns None when Readability finds no article.
        """
        await self.inject()
        opts = json.dumps((options or self.options).to_js())
        raw = await self.page.evaluate(
            f"JSON.stringify(new Readability(document.cloneNode(true), {opts}).parse())"
        )
        article = decode_article(raw)
        if article is None:
            logger.info("no article found at %s", self.page.url)
        return article

    async def parse_url(
        self,
        url: str,
        timeout_s: int = DEFAULT_TIMEOUT_S,
        options: Optional[ReadabilityOptions] = None,
    ) -> Optional[ExtractedArticle]:
        await self.page.goto(url, timeout=timeout_s * 1000, wait_until="domcontentloaded")
        return await self.parse(options)

    async def parse_html(
        self,
        html: str,
        base_url: Optional[str] = None,
        options: Optional[ReadabilityOptions] = None,
    ) -> Optional[ExtractedArticle]:
        """
        Extract from an HTML string. With ``base_url`` the document is served
        at that URL so relative links resolve against it.
        """
        if base_url is None:
            await self.page.set_content(html)
            return await self.parse(options)

        async def _fulfill(route: Route) -> None:
            await route.fulfill(status=200, content_type="text/html; charset=utf-8", body=html)

        await self.page.route(base_url, _fulfill)
        try:
            await self.page.goto(base_url, wait_until="domcontentloaded")
        finally:
            await self.page.unroute(base_url, _fulfill)
        return await self.parse(options)
