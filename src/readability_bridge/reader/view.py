# src/readability_bridge/reader/view.py
from __future__ import annotations

import logging
from importlib.resources import files
from typing import Any, Final

from playwright.async_api import Page

from .controllable import ReaderControllable

logger = logging.getLogger(__name__)

_CONTROLS_ASSET: Final[str] = "assets/reader_controls.js"


def load_controls_js() -> str:
    """
    Return the reader control namespace script bundled with the package.
    """
    return files("readability_bridge.reader").joinpath(_CONTROLS_ASSET).read_text(encoding="utf-8")


class PageReaderView(ReaderControllable):
    """Reader overlay control for a Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self._installed = False

    async def evaluate_javascript(self, script: str) -> Any:
        return await self.page.evaluate(script)

    async def install(self) -> None:
        """
        Inject the control namespace into the current document and into every
        document the page navigates to afterwards.
        """
        if self._installed:
            return
        code = load_controls_js()
        await self.page.add_init_script(script=code)
        await self.page.evaluate(code)
        self._installed = True
        logger.debug("reader controls installed on %s", self.page.url)
