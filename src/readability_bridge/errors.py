# src/readability_bridge/errors.py
from __future__ import annotations


class ReadabilityBridgeError(Exception):
    """Base class for errors raised by readability_bridge."""


class ReaderControlError(ReadabilityBridgeError):
    pass


class ReaderModeRequiredError(ReaderControlError):
    """A style, theme or font size change was attempted outside reader mode."""

    def __init__(self) -> None:
        super().__init__("ReaderStyle changes are only available when in Reader Mode.")


class ScriptResourceError(ReadabilityBridgeError):
    """A bundled or vendored script file could not be located."""


class ExtractionError(ReadabilityBridgeError):
    """Readability.js returned a result that could not be decoded."""
