# src/readability_bridge/extractor/article.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class ExtractedArticle:
    """Result of ``Readability.parse()``, decoded from its JSON output."""

    title: Optional[str] = None
    byline: Optional[str] = None
    dir: Optional[str] = None
    lang: Optional[str] = None
    content: Optional[str] = None
    text_content: Optional[str] = None
    length: int = 0
    excerpt: Optional[str] = None
    site_name: Optional[str] = None
    published_time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedArticle":
        return cls(
            title=data.get("title"),
            byline=data.get("byline"),
            dir=data.get("dir"),
            lang=data.get("lang"),
            content=data.get("content"),
            text_content=data.get("textContent"),
            length=int(data.get("length") or 0),
            excerpt=data.get("excerpt"),
            site_name=data.get("siteName"),
            published_time=data.get("publishedTime"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "byline": self.byline,
            "dir": self.dir,
            "lang": self.lang,
            "content": self.content,
            "textContent": self.text_content,
            "length": self.length,
            "excerpt": self.excerpt,
            "siteName": self.site_name,
            "publishedTime": self.published_time,
        }


@dataclass(frozen=True)
class ReadabilityOptions:
    """
    Options forwarded to the ``Readability`` constructor.

    Only fields that differ from Readability.js defaults are sent, so the
    library keeps ownership of its own defaults.
    """

    debug: bool = False
    max_elems_to_parse: int = 0
    nb_top_candidates: int = 5
    char_threshold: int = 500
    classes_to_preserve: List[str] = field(default_factory=list)
    keep_classes: bool = False
    disable_json_ld: bool = False

    def to_js(self) -> Dict[str, Any]:
        defaults = ReadabilityOptions()
        names = {
            "debug": "debug",
            "max_elems_to_parse": "maxElemsToParse",
            "nb_top_candidates": "nbTopCandidates",
            "char_threshold": "charThreshold",
            "classes_to_preserve": "classesToPreserve",
            "keep_classes": "keepClasses",
            "disable_json_ld": "disableJSONLD",
        }
        return {
            js_name: getattr(self, py_name)
            for py_name, js_name in names.items()
            if getattr(self, py_name) != getattr(defaults, py_name)
        }


@dataclass(frozen=True)
class ReaderableOptions:
    """Options for ``isProbablyReaderable``."""

    min_content_length: int = 140
    min_score: int = 20

    def to_js(self) -> Dict[str, Any]:
        return {
            "minContentLength": self.min_content_length,
            "minScore": self.min_score,
        }
