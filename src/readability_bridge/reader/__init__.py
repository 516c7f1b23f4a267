from .controllable import NAMESPACE, ReaderControllable
from .style import FontFamily, FontSize, ReaderStyle, Theme
from .view import PageReaderView

__all__ = [
    "NAMESPACE",
    "FontFamily",
    "FontSize",
    "PageReaderView",
    "ReaderControllable",
    "ReaderStyle",
    "Theme",
]
