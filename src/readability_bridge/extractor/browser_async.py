# src/readability_bridge/extractor/browser_async.py
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Literal, Optional

from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import (
    Progress,
    BarColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    TaskProgressColumn,
    MofNCompleteColumn,
)

from .article import ExtractedArticle
from .constants import DEFAULT_TIMEOUT_S, VIEWPORT
from .readability import Readability, make_injection_script
from .utils import read_url_lines, render_article_html, sanitize_filename, unique_path

console = Console()
logger = logging.getLogger(__name__)

OutputFormat = Literal["html", "json"]


async def launch_browser(headless: bool = True) -> tuple[Playwright, Browser, BrowserContext]:
    """Launch Chromium and return (playwright, browser, context)."""
    pw = await async_playwright().start()
    browser = await pw.chromium.launch(headless=headless)
    # Readability is injected through an inline <script>, which strict CSPs block
    ctx = await browser.new_context(viewport=VIEWPORT, bypass_csp=True)
    return pw, browser, ctx


async def close_browser(pw: Playwright, browser: Browser, ctx: BrowserContext) -> None:
    """Close the browser context, the browser and the Playwright driver."""
    await ctx.close()
    await browser.close()
    await pw.stop()


def write_article(
    article: ExtractedArticle,
    url: str,
    out_dir: Path,
    fmt: OutputFormat = "html",
) -> Path:
    """Write one article under out_dir, named after its title."""
    stem = sanitize_filename(article.title or "", url)
    if fmt == "json":
        path = unique_path(out_dir, stem, ".json")
        payload = {"url": url, **article.to_dict()}
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        path = unique_path(out_dir, stem, ".html")
        path.write_text(render_article_html(article, url), encoding="utf-8")
    return path


async def extract_url(
    ctx: BrowserContext,
    url: str,
    timeout_s: int = DEFAULT_TIMEOUT_S,
    readerable_only: bool = False,
) -> Optional[ExtractedArticle]:
    """Open url in a fresh page and run Readability on it."""
    page = await ctx.new_page()
    try:
        reader = Readability(page)
        await page.goto(url, timeout=timeout_s * 1000, wait_until="domcontentloaded")
        if readerable_only and not await reader.is_probably_readerable():
            logger.info("%s is not readerable", url)
            return None
        return await reader.parse()
    finally:
        await page.close()


async def _worker(
    sem: asyncio.Semaphore,
    ctx: BrowserContext,
    url: str,
    out_dir: Path,
    timeout_s: int,
    retries: int,
    fmt: OutputFormat,
    readerable_only: bool,
    event_q: asyncio.Queue,
) -> None:
    """Worker task that processes a single URL with retries and concurrency control."""
    attempt = 0

    while True:
        attempt += 1
        async with sem:
            try:
                article = await extract_url(ctx, url, timeout_s, readerable_only)
                if article is None:
                    await event_q.put(("skip", url, "no article"))
                    return

                path = write_article(article, url, out_dir, fmt)
                await event_q.put(("ok", url, path.name))
                return
            except Exception as exc:
                logger.debug("attempt %d for %s failed: %s", attempt, url, exc)
                if attempt <= retries:
                    await asyncio.sleep(min(2 * attempt, 5))
                else:
                    await event_q.put(("fail", url, str(exc)))
                    return


async def extract_run(
    url_file: Path,
    out_dir: Path,
    timeout_s: int,
    max_concurrency: int,
    retries: int,
    fmt: OutputFormat = "html",
    readerable_only: bool = False,
    headless: bool = True,
) -> dict[str, int]:
    """Main async runner for extraction. Returns counts per outcome."""
    urls = read_url_lines(url_file)
    out_dir.mkdir(parents=True, exist_ok=True)

    # fail fast if the Readability scripts are missing
    make_injection_script()

    counts = {"ok": 0, "skip": 0, "fail": 0}
    if not urls:
        console.print("[yellow]No URLs to process.[/yellow]")
        return counts

    pw, browser, ctx = await launch_browser(headless=headless)
    try:
        sem = asyncio.Semaphore(max(1, max_concurrency))

        total = len(urls)
        processed_lines: list[str] = []

        progress = Progress(
            TextColumn("[bold]Overall[/bold]"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("•"),
            MofNCompleteColumn(),
            TextColumn("processed"),
            TextColumn("•"),
            TimeElapsedColumn(),
            TextColumn(" ETA "),
            TimeRemainingColumn(),
            expand=True,
        )
        task_id = progress.add_task("extract", total=total)

        def _render_ui():
            h = console.size.height
            reserved_rows = 7
            tail_cap = max(3, h - reserved_rows)

            over = max(0, len(processed_lines) - tail_cap)
            tail = processed_lines[-tail_cap:] if processed_lines else []
            if over > 0:
                head = f"[dim]… {over} older processed entries hidden …[/dim]"
                body_lines = [head, *tail]
            else:
                body_lines = tail

            body = (
                "\n".join(body_lines)
                if body_lines
                else "[dim]No URLs processed yet...[/dim]"
            )

            return Group(
                Panel(
                    body,
                    title="Processed (latest at bottom)",
                    border_style="green",
                    padding=(0, 1),
                ),
                progress,
            )

        event_q: asyncio.Queue = asyncio.Queue()

        tasks = [
            _worker(sem, ctx, url, out_dir, timeout_s, retries, fmt, readerable_only, event_q)
            for url in urls
        ]

        async def ui_loop() -> None:
            completed = 0

            with Live(_render_ui(), console=console, refresh_per_second=8, transient=False) as live:
                while completed < total:
                    status, url, result = await event_q.get()
                    completed += 1
                    counts[status] += 1
                    progress.update(task_id, advance=1)

                    if status == "ok":
                        processed_lines.append(f"[green]✓[/green] {url}  [dim]{result}[/dim]")
                    elif status == "skip":
                        processed_lines.append(f"[yellow]–[/yellow] {url}  [dim]{result}[/dim]")
                    else:
                        processed_lines.append(
                            f"[red]✗[/red] {url}  [dim]{result}[/dim]"
                        )

                    live.update(_render_ui())

        await asyncio.gather(asyncio.create_task(ui_loop()), *tasks)

    finally:
        await close_browser(pw, browser, ctx)

    return counts
