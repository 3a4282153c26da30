"""CLI interface for the minutes typesetter.

Usage:
    minutes-typesetter segment minutes.txt
    minutes-typesetter preview minutes.txt --video-url https://... -o preview.html
    minutes-typesetter pdf minutes.txt --date 2026-10-06 -o minutes.pdf
    minutes-typesetter verify minutes.txt
    minutes-typesetter inspect minutes.pdf
"""

import logging
import sys

import click

from minutes_typesetter.annotations import count_review_markers
from minutes_typesetter.config import load_config
from minutes_typesetter.pagination import iter_page_roles, paginate
from minutes_typesetter.pdf_export import write_minutes_pdf
from minutes_typesetter.screen import iter_screen_roles, render_html, render_screen
from minutes_typesetter.segmenter import Role, render_minutes
from minutes_typesetter.utils.pdf_parser import extract_text_by_page

logger = logging.getLogger(__name__)


def _read_text(source) -> str:
    return source.read().replace("\r\n", "\n")


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="YAML file overriding page geometry / document metadata")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Typeset council meeting minutes for screen preview and print."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
def segment(source):
    """Print the classified structure of a minutes file."""
    text = _read_text(source)
    doc = render_minutes(text)

    click.echo("--- Title Block ---")
    for line in doc.title_lines:
        click.echo(f"  {line}")
    if not doc.title_lines:
        click.echo("  (none)")

    click.echo("\n--- Body ---")
    for i, line in enumerate(doc.body_lines):
        if line.role == Role.BLANK:
            click.echo(f"  {i:4d} {'blank':<14}")
            continue
        flags = ("B" if line.bold else "-") + str(line.indent_level)
        label = f"{line.section_number} {line.header_text}" if line.section_number else line.text
        click.echo(f"  {i:4d} {line.role.value:<14} {flags} {label[:80]}")

    click.echo("\n--- Signature ---")
    if doc.has_signature:
        click.echo(f"  Names:  {doc.signature.left_name!r} | {doc.signature.right_name!r}")
        click.echo(f"  Titles: {doc.signature.left_title!r} | {doc.signature.right_title!r}")
    else:
        click.echo("  (none)")

    markers = count_review_markers(text)
    if markers:
        click.echo(f"\n{markers} review marker(s) awaiting clerk verification")


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--video-url", default=None, help="Meeting video for review-marker links")
@click.option("-o", "--output", type=click.File("w", encoding="utf-8"), default="-",
              help="HTML output file (default: stdout)")
@click.pass_context
def preview(ctx, source, video_url, output):
    """Render the on-screen preview as HTML."""
    doc = render_minutes(_read_text(source), video_url=video_url)
    output.write(render_html(doc, ctx.obj["config"].geometry))
    output.write("\n")


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--date", "meeting_date", required=True, help="Meeting date, e.g. 2026-10-06")
@click.option("--video-url", default=None, help="Meeting video for review-marker links")
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False),
              help="PDF output path")
@click.pass_context
def pdf(ctx, source, meeting_date, video_url, output):
    """Typeset the minutes as a paginated PDF."""
    path = write_minutes_pdf(output, _read_text(source), meeting_date,
                             video_url=video_url, config=ctx.obj["config"])
    click.echo(f"Wrote {path}")


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_context
def verify(ctx, source):
    """Check that the screen and page renderings agree line for line."""
    doc = render_minutes(_read_text(source))
    geometry = ctx.obj["config"].geometry
    screen_roles = iter_screen_roles(render_screen(doc, geometry))
    pages = paginate(doc, geometry)
    page_roles = iter_page_roles(pages)

    if screen_roles == page_roles:
        click.echo(f"OK: {len(screen_roles)} lines agree across {len(pages)} page(s)")
        return

    for i, (s, p) in enumerate(zip(screen_roles, page_roles)):
        if s != p:
            click.echo(f"Mismatch at line {i}: screen={s} page={p}", err=True)
            break
    else:
        click.echo(f"Length mismatch: screen={len(screen_roles)} page={len(page_roles)}",
                   err=True)
    sys.exit(1)


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
def inspect(pdf_path):
    """Print the text of each page of a generated PDF."""
    for i, text in enumerate(extract_text_by_page(pdf_path), 1):
        click.echo(f"=== Page {i} ===")
        click.echo(text)
        click.echo()


if __name__ == "__main__":
    cli()
