# src/readability_bridge/reader/controllable.py
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Final

from ..errors import ReaderModeRequiredError
from .style import FontSize, ReaderStyle, Theme

logger = logging.getLogger(__name__)

NAMESPACE: Final[str] = "window.__readability_bridge__"


class ReaderControllable(ABC):
    """
    Control surface for a page that hosts the reader overlay.

    Subclasses provide ``evaluate_javascript``; every other operation is built
    on it. Reader mode state lives in the page and is queried on each call,
    never cached here, since the overlay can vanish on navigation without
    telling us.
    """

    @abstractmethod
    async def evaluate_javascript(self, script: str) -> Any:
        """Evaluate ``script`` in the page and return its result, or raise."""

    async def is_reader_mode(self) -> bool:
        result = await self.evaluate_javascript(f"{NAMESPACE}.isReaderMode() ? 1 : 0")
        # bool is an int subclass; only a real 1 counts
        return type(result) is int and result == 1

    async def set_style(self, style: ReaderStyle) -> None:
        await self._call_setter("setStyle", style.to_json())

    async def set_theme(self, theme: Theme) -> None:
        await self._call_setter("setTheme", json.dumps(theme.value))

    async def set_font_size(self, font_size: FontSize) -> None:
        await self._call_setter("setFontSize", json.dumps(font_size.value))

    async def show_reader_content(self, html: str) -> None:
        logger.debug("showing reader overlay (%d chars)", len(html))
        await self.evaluate_javascript(f"{NAMESPACE}.showReaderOverlay({json.dumps(html)});0")

    async def hide_reader_content(self) -> None:
        logger.debug("hiding reader overlay")
        await self.evaluate_javascript(f"{NAMESPACE}.hideReaderOverlay();0")

    async def _call_setter(self, member: str, literal: str) -> None:
        if not await self.is_reader_mode():
            raise ReaderModeRequiredError()
        logger.debug("%s(%s)", member, literal)
        await self.evaluate_javascript(f"{NAMESPACE}.{member}({literal});0")
