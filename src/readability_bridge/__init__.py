"""Mozilla Readability.js and a reader-mode overlay for Playwright pages."""

from .errors import (
    ExtractionError,
    ReadabilityBridgeError,
    ReaderControlError,
    ReaderModeRequiredError,
    ScriptResourceError,
)
from .extractor import ExtractedArticle, Readability, ReadabilityOptions, ReaderableOptions
from .reader import FontFamily, FontSize, PageReaderView, ReaderControllable, ReaderStyle, Theme

__version__ = "0.1.0"

__all__ = [
    "ExtractedArticle",
    "ExtractionError",
    "FontFamily",
    "FontSize",
    "PageReaderView",
    "Readability",
    "ReadabilityBridgeError",
    "ReadabilityOptions",
    "ReaderControlError",
    "ReaderControllable",
    "ReaderModeRequiredError",
    "ReaderStyle",
    "ReaderableOptions",
    "ScriptResourceError",
    "Theme",
]
