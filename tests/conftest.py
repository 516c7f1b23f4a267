"""Shared fixtures for readability_bridge tests."""
from typing import Any, List

import pytest

from readability_bridge.reader import ReaderControllable


class FakeReaderView(ReaderControllable):
    """Records evaluated scripts; answers the mode predicate with `mode`."""

    def __init__(self, mode: Any = 0, error: Exception = None):
        self.mode = mode
        self.error = error
        self.scripts: List[str] = []

    async def evaluate_javascript(self, script: str) -> Any:
        self.scripts.append(script)
        if self.error is not None:
            raise self.error
        if "isReaderMode()" in script:
            return self.mode
        return 0

    @property
    def setter_calls(self) -> List[str]:
        return [s for s in self.scripts if "isReaderMode()" not in s]


@pytest.fixture
def fake_view():
    return FakeReaderView


@pytest.fixture
def script_dir(tmp_path, monkeypatch):
    """Directory holding stand-in Readability scripts, picked up via env."""
    d = tmp_path / "scripts"
    d.mkdir()
    (d / "Readability.js").write_text("function Readability(doc, opts) {}\n", encoding="utf-8")
    (d / "Readability-readerable.js").write_text(
        "function isProbablyReaderable(doc, opts) { return true; }\n", encoding="utf-8"
    )
    monkeypatch.setenv("READABILITY_BRIDGE_SCRIPT_DIR", str(d))
    return d


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep the per-user script install out of the real home directory."""
    d = tmp_path / "data"
    monkeypatch.setenv("READABILITY_BRIDGE_DATA_DIR", str(d))
    return d
