# src/readability_bridge/extractor/utils.py
from __future__ import annotations

import hashlib
import html
import re
from pathlib import Path
from typing import List

from .article import ExtractedArticle
from .constants import MINIMAL_CSS


def sha256_hex(s: str) -> str:
    """
    Return the SHA-256 hash of the given string as a hexadecimal string.
    """
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def read_url_lines(path: Path) -> List[str]:
    """
    Read a text file and return a list of non-empty, non-comment lines.
    Lines starting with '#' are considered comments and ignored.
    """
    lines: List[str] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


def sanitize_filename(title: str, url: str = "") -> str:
    """Convert title to safe filename; untitled pages fall back to a URL hash."""
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '', title or "")
    sanitized = re.sub(r'\s+', '_', sanitized.strip())
    if len(sanitized) > 200:
        sanitized = sanitized[:200]
    if sanitized:
        return sanitized
    return f"untitled_{sha256_hex(url)[:8]}" if url else "untitled"


def unique_path(out_dir: Path, stem: str, suffix: str) -> Path:
    """Return out_dir/stem+suffix, adding _1, _2, ... until it does not exist."""
    path = out_dir / f"{stem}{suffix}"
    counter = 1
    while path.exists():
        path = out_dir / f"{stem}_{counter}{suffix}"
        counter += 1
    return path


def render_article_html(article: ExtractedArticle, url: str) -> str:
    """Wrap extracted content in a standalone reader page."""
    title = html.escape(article.title or "untitled")
    meta = [m for m in (article.byline, article.site_name, article.published_time) if m]
    header = " · ".join(html.escape(m) for m in meta)
    lang = f' lang="{html.escape(article.lang)}"' if article.lang else ""
    direction = f' dir="{html.escape(article.dir)}"' if article.dir else ""
    return f"""<!DOCTYPE html>
<html{lang}{direction}>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>{MINIMAL_CSS}</style>
</head>
<body>
<h1>{title}</h1>
<header>{header}</header>
<article>
{article.content or ""}
</article>
<hr>
<footer>Source: <a href="{html.escape(url)}">{html.escape(url)}</a></footer>
</body>
</html>
"""
