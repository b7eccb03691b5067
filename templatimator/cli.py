"""Command-line interface for Templatimator.

Renders a template against a data document and an optional stylesheet,
and manages the snippet library of saved templates, data sets and styles.

Usage
-----
templatimator render --template report.tpl --data report.yaml --format html
templatimator render --template-name "Markdown List" --data-name Example
templatimator list [template|data|style]
templatimator save template "Weekly" weekly.tpl
templatimator delete style "Old style"

Notes
-----
Settings come from ``templatimator.settings.AppSettings`` (environment and
an optional ``.env`` file); command-line flags take precedence.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from templatimator.exceptions import AppError, UserInputError
from templatimator.library import SnippetKind, SnippetLibrary
from templatimator.pipeline.output import OutputFormat, render_document, write_output
from templatimator.pipeline.runner import configure_logging
from templatimator.settings import AppSettings

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)


def parse_arguments(
    argv: list[str] | None = None, settings: AppSettings | None = None
) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Arguments to parse; ``None`` uses ``sys.argv``.
    settings : AppSettings | None
        Source of defaults for ``--log-level``, ``--library`` and
        ``--format``.

    Returns
    -------
    argparse.Namespace
        Parsed arguments with a ``command`` attribute.
    """
    settings = settings or AppSettings()
    parser = argparse.ArgumentParser(
        prog="templatimator",
        description="Render templates against data into HTML, Markdown, CSV or text.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    parser.add_argument(
        "--library",
        type=Path,
        default=settings.library_path,
        help="Path to the snippet library JSON file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a document.")
    template_source = render.add_mutually_exclusive_group(required=True)
    template_source.add_argument("--template", type=Path, help="Template file.")
    template_source.add_argument(
        "--template-name", help="Name of a template in the library."
    )
    data_source = render.add_mutually_exclusive_group()
    data_source.add_argument("--data", type=Path, help="JSON or YAML data file.")
    data_source.add_argument("--data-name", help="Name of a data set in the library.")
    style_source = render.add_mutually_exclusive_group()
    style_source.add_argument("--style", type=Path, help="CSS stylesheet file.")
    style_source.add_argument("--style-name", help="Name of a style in the library.")
    render.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=settings.default_format,
        help="Output format.",
    )
    render.add_argument("--output", type=Path, help="Write the result to this file.")
    render.add_argument(
        "--markup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force or skip Markdown conversion for html/pdf output.",
    )
    render.add_argument(
        "--display",
        action="store_true",
        help="Emit the display form (escaped <pre> for text formats).",
    )

    listing = subparsers.add_parser("list", help="List library snippets.")
    listing.add_argument(
        "kind", nargs="?", choices=[kind.value for kind in SnippetKind]
    )

    save = subparsers.add_parser("save", help="Save a file into the library.")
    save.add_argument("kind", choices=[kind.value for kind in SnippetKind])
    save.add_argument("name")
    save.add_argument("path", type=Path)

    delete = subparsers.add_parser("delete", help="Delete a library snippet.")
    delete.add_argument("kind", choices=[kind.value for kind in SnippetKind])
    delete.add_argument("name")

    return parser.parse_args(argv)


def _resolve_text(
    library: SnippetLibrary, kind: SnippetKind, path: Path | None, name: str | None
) -> str:
    if path is not None:
        return path.read_text(encoding="utf-8")
    if name is not None:
        return library.get(kind, name).content
    return ""


def command_render(args: argparse.Namespace, library: SnippetLibrary) -> int:
    """Render a document and print it or write it to ``--output``."""
    template = _resolve_text(
        library, SnippetKind.TEMPLATE, args.template, args.template_name
    )
    data_text = _resolve_text(library, SnippetKind.DATA, args.data, args.data_name)
    stylesheet = _resolve_text(library, SnippetKind.STYLE, args.style, args.style_name)
    result = render_document(
        template, data_text, stylesheet, args.format, markup=args.markup
    )
    content = result.display if args.display else result.export
    if args.output is None:
        console.print(
            content, markup=False, emoji=False, highlight=False, soft_wrap=True
        )
        return 0
    if not write_output(content, args.output):
        return 1
    logger.info("Wrote %s output to %s", result.mime_type, args.output)
    return 0


def command_list(args: argparse.Namespace, library: SnippetLibrary) -> int:
    """Print library snippets as a table."""
    kinds = [SnippetKind(args.kind)] if args.kind else list(SnippetKind)
    table = Table(title="Snippet library")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Chars", justify="right")
    table.add_column("First line")
    for kind in kinds:
        for snippet in library.list(kind):
            first_line = snippet.content.strip().splitlines()[:1]
            table.add_row(
                kind.value,
                escape(snippet.name),
                str(len(snippet.content)),
                escape(first_line[0]) if first_line else "",
            )
    console.print(table)
    return 0


def command_save(args: argparse.Namespace, library: SnippetLibrary) -> int:
    """Store a file's content under a name and persist the library."""
    content = args.path.read_text(encoding="utf-8")
    snippet = library.save(SnippetKind(args.kind), args.name, content)
    library.flush()
    console.print(f"Saved {args.kind} [bold]{escape(snippet.name)}[/bold]")
    return 0


def command_delete(args: argparse.Namespace, library: SnippetLibrary) -> int:
    """Remove a named snippet and persist the library."""
    library.delete(SnippetKind(args.kind), args.name)
    library.flush()
    console.print(f"Deleted {args.kind} [bold]{escape(args.name)}[/bold]")
    return 0


_COMMANDS = {
    "render": command_render,
    "list": command_list,
    "save": command_save,
    "delete": command_delete,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return a process exit status.

    Returns
    -------
    int
        0 on success, 1 on a handled application or I/O error. Argument
        errors exit with status 2 from argparse.
    """
    try:
        settings = AppSettings()
    except AppError as exc:
        error_console.print(
            Panel(escape(str(exc)), title="Configuration error", style="red")
        )
        return 1
    args = parse_arguments(argv, settings)
    configure_logging(args.log_level, enable_file=settings.file_logs_enabled)
    try:
        library = SnippetLibrary(args.library).load()
        return _COMMANDS[args.command](args, library)
    except UserInputError as exc:
        error_console.print(f"[red]{escape(exc.message)}[/red]", highlight=False)
        return 1
    except AppError as exc:
        logger.error("%s", exc, extra={"error": exc.to_dict()})
        error_console.print(Panel(escape(exc.message), title=exc.code, style="red"))
        return 1
    except OSError as exc:
        logger.error("File error: %s", exc)
        error_console.print(
            f"[red]File error:[/red] {escape(str(exc))}", highlight=False
        )
        return 1
