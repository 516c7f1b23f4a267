"""Tests for the Playwright page adapter."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from readability_bridge.reader import NAMESPACE, PageReaderView
from readability_bridge.reader.view import load_controls_js


@pytest.fixture
def page():
    page = MagicMock()
    page.url = "https://example.com/post"
    page.evaluate = AsyncMock(return_value=1)
    page.add_init_script = AsyncMock()
    return page


class TestControlsScript:
    """Tests for the bundled control namespace script."""

    def test_defines_namespace_members(self):
        code = load_controls_js()
        assert NAMESPACE in code
        for member in (
            "setStyle",
            "setTheme",
            "setFontSize",
            "isReaderMode",
            "showReaderOverlay",
            "hideReaderOverlay",
        ):
            assert f"{member}:" in code


class TestPageReaderView:
    """Tests for PageReaderView."""

    @pytest.mark.asyncio
    async def test_evaluate_delegates_to_page(self, page):
        view = PageReaderView(page)
        assert await view.is_reader_mode() is True
        page.evaluate.assert_awaited_once_with(f"{NAMESPACE}.isReaderMode() ? 1 : 0")

    @pytest.mark.asyncio
    async def test_install_registers_init_script_once(self, page):
        view = PageReaderView(page)
        await view.install()
        await view.install()
        page.add_init_script.assert_awaited_once_with(script=load_controls_js())
        page.evaluate.assert_awaited_once_with(load_controls_js())
