"""Tests for Readability.js loading and invocation."""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from readability_bridge.errors import ExtractionError, ScriptResourceError
from readability_bridge.extractor import (
    ExtractedArticle,
    Readability,
    ReadabilityOptions,
    ReaderableOptions,
    decode_article,
    load_script,
    make_injection_script,
)
from readability_bridge.extractor.readability import user_data_dir


ARTICLE = {
    "title": "Hello \"World\"",
    "byline": "Jane Doe",
    "dir": "ltr",
    "lang": "en",
    "content": "<div id=\"readability-page-1\"><p>Body</p></div>",
    "textContent": "Body",
    "length": 4,
    "excerpt": "Body",
    "siteName": "Example",
    "publishedTime": "2024-01-01T12:00:00Z",
}


@pytest.fixture
def page():
    page = MagicMock()
    page.url = "https://example.com/post"
    page.evaluate = AsyncMock()
    page.goto = AsyncMock()
    page.set_content = AsyncMock()
    page.route = AsyncMock()
    page.unroute = AsyncMock()
    return page


class TestLoadScript:
    """Tests for locating the vendored scripts."""

    def test_loads_from_env_dir(self, script_dir):
        assert "function Readability" in load_script("Readability.js")

    def test_explicit_dir_wins(self, script_dir, tmp_path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "Readability.js").write_text("// other", encoding="utf-8")
        assert load_script("Readability.js", other) == "// other"

    def test_node_modules_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("READABILITY_BRIDGE_SCRIPT_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        target = tmp_path / "node_modules" / "@mozilla" / "readability"
        target.mkdir(parents=True)
        (target / "Readability.js").write_text("// npm", encoding="utf-8")
        assert load_script("Readability.js") == "// npm"

    def test_user_install_found_from_any_directory(self, tmp_path, monkeypatch, isolated_data_dir):
        monkeypatch.delenv("READABILITY_BRIDGE_SCRIPT_DIR", raising=False)
        target = isolated_data_dir / "node_modules" / "@mozilla" / "readability"
        target.mkdir(parents=True)
        (target / "Readability.js").write_text("// user install", encoding="utf-8")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        assert load_script("Readability.js") == "// user install"

    def test_user_data_dir_defaults_to_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("READABILITY_BRIDGE_DATA_DIR", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert user_data_dir() == tmp_path / ".local" / "share" / "readability-bridge"

    def test_missing_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("READABILITY_BRIDGE_SCRIPT_DIR", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ScriptResourceError, match="Readability.js"):
            load_script("Readability.js")

    def test_injection_script_embeds_both_sources(self, script_dir):
        script = make_injection_script()
        assert "if (!window.Readability)" in script
        assert json.dumps(
            load_script("Readability-readerable.js") + "\n" + load_script("Readability.js")
        ) in script


class TestDecodeArticle:
    """Tests for decoding Readability output."""

    def test_decodes_object(self):
        article = decode_article(json.dumps(ARTICLE))
        assert article.title == "Hello \"World\""
        assert article.text_content == "Body"
        assert article.site_name == "Example"
        assert article.length == 4

    @pytest.mark.parametrize("raw", [None, "null"])
    def test_null_is_none(self, raw):
        assert decode_article(raw) is None

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42"])
    def test_malformed_raises(self, raw):
        with pytest.raises(ExtractionError):
            decode_article(raw)


class TestReadability:
    """Tests for Readability against a mocked page."""

    @pytest.mark.asyncio
    async def test_parse_skips_injection_when_loaded(self, page):
        page.evaluate.side_effect = [1, json.dumps(ARTICLE)]
        article = await Readability(page).parse()
        assert article == ExtractedArticle.from_dict(ARTICLE)
        script = page.evaluate.await_args_list[1].args[0]
        assert script == "JSON.stringify(new Readability(document.cloneNode(true), {}).parse())"

    @pytest.mark.asyncio
    async def test_parse_injects_when_missing(self, page, script_dir):
        page.evaluate.side_effect = [0, None, "null"]
        assert await Readability(page).parse() is None
        assert page.evaluate.await_args_list[1].args[0] == make_injection_script()

    @pytest.mark.asyncio
    async def test_parse_passes_options(self, page):
        page.evaluate.side_effect = [1, "null"]
        options = ReadabilityOptions(char_threshold=250, keep_classes=True)
        await Readability(page, options=options).parse()
        script = page.evaluate.await_args_list[1].args[0]
        assert '{"charThreshold": 250, "keepClasses": true}' in script

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result,expected", [(1, True), (0, False)])
    async def test_is_probably_readerable(self, page, result, expected):
        page.evaluate.side_effect = [1, result]
        reader = Readability(page)
        assert await reader.is_probably_readerable(ReaderableOptions(min_score=10)) is expected
        script = page.evaluate.await_args_list[1].args[0]
        assert script == (
            'isProbablyReaderable(document, {"minContentLength": 140, "minScore": 10}) ? 1 : 0'
        )

    @pytest.mark.asyncio
    async def test_parse_url_navigates_first(self, page):
        page.evaluate.side_effect = [1, json.dumps(ARTICLE)]
        article = await Readability(page).parse_url("https://example.com/post", timeout_s=5)
        page.goto.assert_awaited_once_with(
            "https://example.com/post", timeout=5000, wait_until="domcontentloaded"
        )
        assert article.byline == "Jane Doe"

    @pytest.mark.asyncio
    async def test_parse_html_without_base_url(self, page):
        page.evaluate.side_effect = [1, "null"]
        await Readability(page).parse_html("<p>x</p>")
        page.set_content.assert_awaited_once_with("<p>x</p>")
        page.route.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_html_serves_at_base_url(self, page):
        page.evaluate.side_effect = [1, "null"]
        await Readability(page).parse_html("<p>x</p>", base_url="https://example.com/a")
        page.route.assert_awaited_once()
        assert page.route.await_args.args[0] == "https://example.com/a"
        page.goto.assert_awaited_once_with("https://example.com/a", wait_until="domcontentloaded")
        page.unroute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_evaluation_error_propagates(self, page):
        page.evaluate.side_effect = RuntimeError("Execution context was destroyed")
        with pytest.raises(RuntimeError):
            await Readability(page).parse()
