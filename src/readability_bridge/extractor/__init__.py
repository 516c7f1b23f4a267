from .article import ExtractedArticle, ReadabilityOptions, ReaderableOptions
from .readability import Readability, decode_article, load_script, make_injection_script

__all__ = [
    "ExtractedArticle",
    "Readability",
    "ReadabilityOptions",
    "ReaderableOptions",
    "decode_article",
    "load_script",
    "make_injection_script",
]
