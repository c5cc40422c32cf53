"""CLI interface using typer + rich."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from cvpress.config import AppConfig, load_config
from cvpress.errors import CvPressError
from cvpress.export.fonts import FontRegistry, FontTable
from cvpress.export.merge import merge_documents
from cvpress.export.pdf_backend import count_pages, render_to_bytes
from cvpress.models.normalize import normalize_cv, normalize_letter
from cvpress.pipeline.fitting import FitOptions, fit_one_page
from cvpress.pipeline.generate import generate_cv_and_letter
from cvpress.templates.letter import build_letter_document
from cvpress.templates.registry import LayoutHint, TemplateId, list_templates
from cvpress.theme import make_colors

app = typer.Typer(
    name="cvpress",
    help="One-page CV and cover letter PDF renderer",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_json(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid JSON in {path}: {exc}[/red]")
        raise typer.Exit(1)


def _fonts(config: AppConfig) -> FontTable:
    return FontRegistry.from_config(config.fonts).get()


def _write(output: Path, data: bytes) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)


@app.command()
def templates() -> None:
    """List the available CV templates."""
    for meta in list_templates():
        badge = f" [green]({meta.badge})[/green]" if meta.badge else ""
        console.print(f"  [bold]{meta.id.value}[/bold]: {meta.label}{badge}")
        console.print(f"    [dim]{meta.description}[/dim]")


@app.command()
def render(
    model: Path = typer.Argument(help="CV model JSON file"),
    output: Path = typer.Option(Path("cv.pdf"), "--output", "-o", help="Output PDF path"),
    template: TemplateId = typer.Option(TemplateId.ATS, "--template", "-t", help="Template id"),
    lang: str = typer.Option("fr", "--lang", "-l", help="Section label language (fr/en)"),
    brand: str = typer.Option(None, "--brand", "-b", help="Brand color, e.g. #2563eb"),
    hint: LayoutHint = typer.Option(LayoutHint.AUTO, "--hint", help="Layout density hint"),
    letter: Path = typer.Option(None, "--letter", help="Cover letter JSON to append"),
    letter_text: Path = typer.Option(None, "--letter-text", help="Plain-text cover letter to append"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Render a CV fitted to one page, optionally followed by a cover letter."""
    _setup_logging(verbose)
    config = load_config(config_path)
    raw = _read_json(model)
    if letter_text is not None and not letter_text.exists():
        console.print(f"[red]File not found: {letter_text}[/red]")
        raise typer.Exit(1)

    try:
        cv = normalize_cv(raw)
        lm = normalize_letter(_read_json(letter)) if letter is not None else None
        with console.status("Fitting document..."):
            bundle = generate_cv_and_letter(
                cv,
                brand_hex=brand or config.theme.default_brand,
                lang=lang,
                template_id=template,
                layout_hint=hint,
                letter=lm,
                letter_text=letter_text.read_text(encoding="utf-8") if letter_text else None,
                cv_options=FitOptions.from_config(config.fit),
                letter_options=FitOptions.from_config(config.letter_fit),
                fonts=_fonts(config),
                producer=config.output.producer,
                author=config.output.author or None,
            )
    except CvPressError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    _write(output, bundle.data)
    console.print(f"[green]PDF saved: {output}[/green]")
    summary = f"Template: {template.value} | CV scale: {bundle.cv.scale:.3f}"
    if bundle.letter is not None:
        summary += f" | Letter scale: {bundle.letter.scale:.3f}"
    summary += f"\nPages: {bundle.pages} | Probes: {len(bundle.cv.trials)}"
    console.print(Panel(summary, title="Result"))
    if bundle.cv.pages > 1:
        console.print("[yellow]The CV still overflows one page at the minimum scale.[/yellow]")


@app.command()
def letter(
    source: Path = typer.Argument(help="Cover letter JSON file, or a .txt file"),
    output: Path = typer.Option(Path("letter.pdf"), "--output", "-o", help="Output PDF path"),
    brand: str = typer.Option(None, "--brand", "-b", help="Brand color, e.g. #2563eb"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Render a cover letter fitted to one page."""
    _setup_logging(verbose)
    config = load_config(config_path)
    if source.suffix.lower() == ".txt":
        if not source.exists():
            console.print(f"[red]File not found: {source}[/red]")
            raise typer.Exit(1)
        content = source.read_text(encoding="utf-8")
    else:
        content = _read_json(source)

    try:
        lm = content if isinstance(content, str) else normalize_letter(content)
        colors = make_colors(brand or config.theme.default_brand)
        fitted = fit_one_page(
            lambda scale: build_letter_document(lm, colors, scale),
            FitOptions.from_config(config.letter_fit),
            render=functools.partial(
                render_to_bytes,
                fonts=_fonts(config),
                producer=config.output.producer,
                author=config.output.author or None,
            ),
        )
    except CvPressError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    _write(output, fitted.data)
    console.print(f"[green]PDF saved: {output}[/green] (scale {fitted.scale:.3f})")


@app.command()
def merge(
    files: list[Path] = typer.Argument(help="PDF files to concatenate, in order"),
    output: Path = typer.Option(Path("merged.pdf"), "--output", "-o", help="Output PDF path"),
) -> None:
    """Concatenate PDF files into one document."""
    missing = [f for f in files if not f.exists()]
    if missing:
        console.print(f"[red]File not found: {', '.join(str(f) for f in missing)}[/red]")
        raise typer.Exit(1)

    try:
        data = merge_documents([f.read_bytes() for f in files])
        pages = count_pages(data)
    except CvPressError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    _write(output, data)
    console.print(f"[green]PDF saved: {output}[/green] ({pages} pages)")


@app.command()
def colors(
    brand: str = typer.Argument(help="Brand color, e.g. #2563eb"),
) -> None:
    """Show the palette derived from a brand color."""
    palette = make_colors(brand)
    lines = [
        f"[on {value}]      [/on {value}] {name:<11} {value}"
        for name, value in (
            ("brand", palette.brand),
            ("brand_dark", palette.brand_dark),
            ("ink", palette.ink),
            ("muted", palette.muted),
            ("border", palette.border),
            ("bg_soft", palette.bg_soft),
            ("hair", palette.hair),
        )
    ]
    console.print(Panel("\n".join(lines), title="Palette"))


if __name__ == "__main__":
    app()
