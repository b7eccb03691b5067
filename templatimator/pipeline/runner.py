"""Programmatic entrypoint for rendering documents from files.

This module is the boundary API between the command line and the
rendering pipeline. It reads template, data and stylesheet files, delegates
all text processing to ``templatimator.pipeline.output``, and writes the
result. No rendering logic lives here.

Examples
--------
>>> from pathlib import Path
>>> from templatimator.pipeline.runner import run_from_config
>>> ok = run_from_config(Path("report.md.tpl"), Path("report.yaml"))  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from pathlib import Path

from templatimator.config import (
    DEFAULT_OUTPUT_FORMAT,
    LOG_DIR,
    LOG_FILENAME,
    LOG_FORMAT,
)
from templatimator.exceptions import TemplateSyntaxError

from .output import RenderResult, render_document, write_output
from .templating import extract_placeholders_from_template, load_template

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging for command-line execution.

    Sets up a console handler and, optionally, a file handler under
    ``LOG_DIR`` using ``LOG_FORMAT`` from ``templatimator.config``. File
    handler creation errors are swallowed so the CLI works on read-only
    installs.

    Parameters
    ----------
    log_level : str, optional
        The logging level (e.g., "INFO", "DEBUG"). Defaults to "INFO".
    enable_file : bool, optional
        Whether to also write logs to ``LOG_DIR / LOG_FILENAME``.

    Notes
    -----
    Existing root handlers are removed first, so the function is safe to
    call repeatedly.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(0, logging.FileHandler(LOG_DIR / LOG_FILENAME, mode="a"))
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def _read_optional(path: Path | None) -> str:
    if path is None:
        return ""
    return Path(path).read_text(encoding="utf-8")


def render_files(
    template_path: Path,
    data_path: Path | None = None,
    stylesheet_path: Path | None = None,
    output_format: str = DEFAULT_OUTPUT_FORMAT,
    markup: bool | None = None,
) -> RenderResult:
    """Render a document from files.

    Parameters
    ----------
    template_path : Path
        Template file.
    data_path : Path or None, optional
        JSON or YAML-subset data file; ``None`` renders with no data.
    stylesheet_path : Path or None, optional
        CSS file appended to html/pdf output.
    output_format : str, optional
        Output format name. Defaults to ``DEFAULT_OUTPUT_FORMAT``.
    markup : bool or None, optional
        Explicit markup conversion flag; ``None`` uses the heuristic.

    Returns
    -------
    RenderResult
        The rendered document.

    Raises
    ------
    OSError
        If one of the input files cannot be read.
    UserInputError
        If ``output_format`` is unknown.
    """
    template = load_template(Path(template_path))
    if logger.isEnabledFor(logging.DEBUG):
        try:
            placeholders = extract_placeholders_from_template(template)
            logger.debug("Template %s references: %s", template_path, placeholders)
        except TemplateSyntaxError as exc:
            logger.debug("Template %s is ill-formed: %s", template_path, exc)
    return render_document(
        template,
        _read_optional(data_path),
        _read_optional(stylesheet_path),
        output_format,
        markup=markup,
    )


def run_from_config(
    template_path: Path,
    data_path: Path | None = None,
    stylesheet_path: Path | None = None,
    output_format: str = DEFAULT_OUTPUT_FORMAT,
    output_file: Path | None = None,
    markup: bool | None = None,
) -> bool:
    """Render a document from files and write its export form.

    When ``output_file`` is ``None`` the document is written next to the
    template as ``<stem>.rendered.<extension>``.

    Returns
    -------
    bool
        ``True`` if the document was written; ``False`` if an error
        occurred (all errors are logged).
    """
    try:
        result = render_files(
            template_path, data_path, stylesheet_path, output_format, markup
        )
    except Exception as exc:
        logger.exception("Failed to render %s: %s", template_path, exc)
        return False
    target = (
        Path(output_file)
        if output_file is not None
        else Path(template_path).with_name(
            f"{Path(template_path).stem}.rendered.{result.extension}"
        )
    )
    if write_output(result.export, target):
        logger.info("Wrote %s output to %s", result.mime_type, target)
        return True
    return False


__all__ = [
    "configure_logging",
    "render_files",
    "run_from_config",
]
