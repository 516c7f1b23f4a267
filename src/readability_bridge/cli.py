# src/readability_bridge/cli.py
import asyncio
import html
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .config import Settings, decide_concurrency
from .errors import ReaderModeRequiredError, ScriptResourceError
from .extractor import ReaderableOptions, Readability
from .extractor.article import ExtractedArticle
from .extractor.browser_async import close_browser, extract_run, launch_browser
from .extractor.readability import READABILITY_JS, READERABLE_JS, load_script, user_data_dir
from .log import configure_logging, get_logger
from .reader import FontFamily, FontSize, PageReaderView, ReaderStyle, Theme

cli = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
logger = get_logger("cli")

_READABILITY_NPM = "@mozilla/readability"


@cli.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG | INFO | WARNING | ERROR (env: READABILITY_BRIDGE_LOG_LEVEL)"
    ),
):
    """Readability.js extraction and reader mode for Playwright pages."""
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)


def _scripts_present(script_dir: Optional[Path]) -> bool:
    try:
        load_script(READABILITY_JS, script_dir)
        load_script(READERABLE_JS, script_dir)
    except ScriptResourceError:
        return False
    return True


@cli.command("setup")
def setup(
    install: bool = typer.Option(
        False, "--install", help="Install Playwright Chromium and the Readability scripts"
    ),
):
    """Check and install Playwright Chromium and the Readability.js scripts."""
    settings = Settings.from_env()

    ok = True
    try:
        subprocess.run(
            [sys.executable, "-m", "playwright", "install", "--dry-run"],
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except subprocess.CalledProcessError:
        ok = False

    console.print(f"[cyan]Playwright:[/cyan] {'Already installed' if ok else 'missing'}")

    if not ok and install:
        console.print("[yellow]Installing Playwright chromium...[/yellow]")
        subprocess.run(
            [sys.executable, "-m", "playwright", "install", "--with-deps", "chromium"],
            check=True,
        )
        console.print("[green]Playwright installed.[/green]")

    scripts_ok = _scripts_present(settings.script_dir)
    console.print(f"[cyan]Readability.js:[/cyan] {'found' if scripts_ok else 'missing'}")

    if not scripts_ok and install:
        npm = shutil.which("npm")
        if npm is None:
            console.print("[red]npm not found; install Node.js or set READABILITY_BRIDGE_SCRIPT_DIR.[/red]")
            raise typer.Exit(code=1)
        prefix = user_data_dir()
        prefix.mkdir(parents=True, exist_ok=True)
        console.print(f"[yellow]Installing {_READABILITY_NPM}...[/yellow]")
        subprocess.run([npm, "install", "--prefix", str(prefix), _READABILITY_NPM], check=True)
        console.print(f"[green]Readability scripts installed into {prefix}.[/green]")

    if install and ok and scripts_ok:
        console.print("[green]All dependencies are already installed.[/green]")


async def _check(url: str, timeout_s: int, options: ReaderableOptions, headless: bool) -> bool:
    pw, browser, ctx = await launch_browser(headless=headless)
    try:
        page = await ctx.new_page()
        await page.goto(url, timeout=timeout_s * 1000, wait_until="domcontentloaded")
        return await Readability(page).is_probably_readerable(options)
    finally:
        await close_browser(pw, browser, ctx)


@cli.command("check")
def check(
    url: str = typer.Argument(..., help="Page to test"),
    timeout_s: Optional[int] = typer.Option(None, help="Navigation timeout (seconds)"),
    min_content_length: int = typer.Option(
        ReaderableOptions().min_content_length, help="Minimum text length of a paragraph node"
    ),
    min_score: int = typer.Option(
        ReaderableOptions().min_score, help="Minimum cumulated score"
    ),
):
    """Report whether a page is probably readerable."""
    settings = Settings.from_env()
    options = ReaderableOptions(min_content_length=min_content_length, min_score=min_score)
    try:
        readerable = asyncio.run(_check(url, timeout_s or settings.timeout_s, options, settings.headless))
    except ScriptResourceError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    if readerable:
        console.print(f"[green]✓[/green] {url} is probably readerable")
    else:
        console.print(f"[yellow]✗[/yellow] {url} is probably not readerable")
        raise typer.Exit(code=2)


@cli.command("extract")
def extract(
    url_file: Path = typer.Option(
        ..., "--url-file", "-i", exists=True, help="Text file with one URL per line"
    ),
    out_dir: Path = typer.Option(
        Path("output"), "--out-dir", "-o", help="Output directory"
    ),
    fmt: str = typer.Option(
        "html", "--format", "-f", help="Output format: html | json"
    ),
    timeout_s: Optional[int] = typer.Option(
        None, help="Per-URL navigation timeout (seconds)"
    ),
    mode: str = typer.Option(
        "auto", "--mode", "-m", help="Concurrency preset: auto | safe | aggressive"
    ),
    max_concurrency: Optional[int] = typer.Option(
        None, "--max-concurrency", "-c", help="Max concurrent pages (overrides --mode)"
    ),
    retries: Optional[int] = typer.Option(
        None, "--retries", "-r", help="Retries per URL on failure"
    ),
    readerable_only: bool = typer.Option(
        False, "--readerable-only", help="Skip pages that are probably not readerable"
    ),
):
    """Extract articles from URLs and save them as HTML or JSON."""
    if fmt not in ("html", "json"):
        raise typer.BadParameter("must be 'html' or 'json'", param_hint="--format")

    settings = Settings.from_env()
    concurrency = max_concurrency or decide_concurrency(mode)
    logger.info("concurrency=%d mode=%s", concurrency, mode)

    try:
        counts = asyncio.run(
            extract_run(
                url_file,
                out_dir,
                timeout_s or settings.timeout_s,
                concurrency,
                settings.retries if retries is None else retries,
                fmt=fmt,
                readerable_only=readerable_only,
                headless=settings.headless,
            )
        )
    except ScriptResourceError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"\n[green]✓[/green] {counts['ok']} saved  "
        f"[yellow]–[/yellow] {counts['skip']} skipped  "
        f"[red]✗[/red] {counts['fail']} failed  → {out_dir.absolute()}"
    )


def _reader_html(article: ExtractedArticle) -> str:
    title = html.escape(article.title or "")
    byline = f"<p><em>{html.escape(article.byline)}</em></p>" if article.byline else ""
    return f"<h1>{title}</h1>{byline}{article.content or ''}"


_READ_KEYS = {
    "l": Theme.LIGHT,
    "d": Theme.DARK,
    "s": Theme.SEPIA,
    "a": Theme.AUTO,
}


async def _next_key() -> str:
    """Read one command from stdin; end of input counts as quit."""
    try:
        line = await asyncio.to_thread(console.input, "> ")
    except EOFError:
        return "q"
    return line.strip().lower()


async def _read(url: str, style: ReaderStyle, timeout_s: int) -> None:
    pw, browser, ctx = await launch_browser(headless=False)
    try:
        page = await ctx.new_page()
        article = await Readability(page).parse_url(url, timeout_s)
        if article is None:
            console.print(f"[yellow]No article found at {url}[/yellow]")
            return

        view = PageReaderView(page)
        await view.install()
        await view.show_reader_content(_reader_html(article))
        await view.set_style(style)

        console.print(
            "[cyan]Reader mode on.[/cyan] "
            "[dim]l/d/s/a: theme  +/-: font size  h: hide  v: show  q: quit[/dim]"
        )
        while True:
            key = await _next_key()
            try:
                if key == "q":
                    await view.hide_reader_content()
                    return
                if key == "h":
                    await view.hide_reader_content()
                elif key == "v":
                    await view.show_reader_content(_reader_html(article))
                    await view.set_style(style)
                elif key in _READ_KEYS:
                    style = style.with_theme(_READ_KEYS[key])
                    await view.set_theme(style.theme)
                elif key in ("+", "-"):
                    size = style.font_size.bigger() if key == "+" else style.font_size.smaller()
                    style = style.with_font_size(size)
                    await view.set_font_size(size)
            except ReaderModeRequiredError as exc:
                console.print(f"[yellow]{exc}[/yellow] [dim](press v to show it again)[/dim]")
    finally:
        await close_browser(pw, browser, ctx)


@cli.command("read")
def read(
    url: str = typer.Argument(..., help="Page to open in reader mode"),
    theme: Theme = typer.Option(Theme.AUTO, "--theme", "-t", help="Reader theme"),
    font_size: FontSize = typer.Option(FontSize.MEDIUM, "--font-size", "-s", help="Reader font size"),
    font: FontFamily = typer.Option(FontFamily.SANS_SERIF, "--font", help="Reader font family"),
    timeout_s: Optional[int] = typer.Option(None, help="Navigation timeout (seconds)"),
):
    """Open a page in a browser window and show it in reader mode."""
    settings = Settings.from_env()
    style = ReaderStyle(theme=theme, font_size=font_size, font=font)
    try:
        asyncio.run(_read(url, style, timeout_s or settings.timeout_s))
    except ScriptResourceError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)


if __name__ == '__main__':
    cli()
