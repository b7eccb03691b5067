"""Tests for the file-based rendering runner."""

import logging
from pathlib import Path

import templatimator.pipeline.runner as runner


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_configure_logging_filehandler_error(monkeypatch):
    """File handler failures do not stop console logging."""

    def bad_file_handler(*_a, **_k):
        raise OSError("read-only")

    monkeypatch.setattr(runner.logging, "FileHandler", bad_file_handler)
    runner.configure_logging("DEBUG", enable_file=True)
    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_writes_to_log_dir(monkeypatch, tmp_path: Path):
    """A file handler is added under the configured log directory."""
    monkeypatch.setattr(runner, "LOG_DIR", tmp_path / "logs")
    runner.configure_logging("INFO", enable_file=True)
    handlers = logging.getLogger().handlers
    try:
        assert any(isinstance(h, logging.FileHandler) for h in handlers)
        assert (tmp_path / "logs").is_dir()
    finally:
        for h in handlers[:]:
            h.close()
            logging.getLogger().removeHandler(h)


def test_render_files_reads_all_inputs(tmp_path: Path):
    """Template, data and stylesheet files are combined."""
    template = _write(tmp_path / "t.md", "# {{ title }}")
    data = _write(tmp_path / "d.yaml", "title: Report")
    style = _write(tmp_path / "s.css", "h1{}")
    result = runner.render_files(template, data, style)
    assert result.export == (
        '<div class="templatimator-output"><h1>Report</h1></div><style>h1{}</style>'
    )


def test_render_files_without_data(tmp_path: Path):
    """Missing data renders with an empty context."""
    template = _write(tmp_path / "t.txt", "[{{ x }}]")
    assert runner.render_files(template, output_format="txt").export == "[]"


def test_render_files_logs_placeholders_at_debug(tmp_path: Path, caplog):
    """Referenced paths are logged when debugging."""
    template = _write(tmp_path / "t.txt", "{{ b }}{{ a }}")
    with caplog.at_level(logging.DEBUG, logger="templatimator.pipeline.runner"):
        runner.render_files(template, output_format="txt")
    assert "['a', 'b']" in caplog.text


def test_run_from_config_default_output_path(tmp_path: Path):
    """Output lands next to the template with a .rendered suffix."""
    template = _write(tmp_path / "list.tpl", "{% for x in xs %}{{ x }};{% endfor %}")
    data = _write(tmp_path / "d.json", '{"xs": ["a", "b"]}')
    assert runner.run_from_config(template, data, output_format="csv") is True
    assert (tmp_path / "list.rendered.csv").read_text(encoding="utf-8") == "a;b;"


def test_run_from_config_explicit_output(tmp_path: Path):
    """An explicit output file is honoured."""
    template = _write(tmp_path / "t.tpl", "- {{ x }}")
    target = tmp_path / "out" / "doc.html"
    assert runner.run_from_config(template, output_file=target) is True
    assert target.read_text(encoding="utf-8").endswith("<ul><li></li></ul></div>")


def test_run_from_config_missing_template(tmp_path: Path):
    """Unreadable inputs are reported as failure."""
    assert runner.run_from_config(tmp_path / "missing.tpl") is False


def test_run_from_config_unknown_format(tmp_path: Path):
    """An unknown format is reported as failure."""
    template = _write(tmp_path / "t.tpl", "x")
    assert runner.run_from_config(template, output_format="docx") is False
