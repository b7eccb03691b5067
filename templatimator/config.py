"""Global configuration constants for the project.

Defines paths, filenames, output markers and the default snippet library
used across the pipeline and the command-line interface.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
PACKAGE_DIR: Path = PROJECT_ROOT / "templatimator"
LOG_DIR: Path = PROJECT_ROOT / "logs"
ENV_FILE: Path = PROJECT_ROOT / ".env"

# Logging
LOG_FILENAME: str = "templatimator.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL: str = "INFO"

# Output rendering
DEFAULT_OUTPUT_FORMAT: str = "html"
OUTPUT_WRAPPER_CLASS: str = "templatimator-output"
RENDER_ERROR_PREFIX: str = "Error rendering template: "

# Export metadata per format: (mime type, file extension)
EXPORT_TYPES: dict[str, tuple[str, str]] = {
    "html": ("text/html", "html"),
    "pdf": ("text/html", "html"),
    "markdown": ("text/markdown", "md"),
    "csv": ("text/csv", "csv"),
    "txt": ("text/plain", "txt"),
}

# Snippet library
DEFAULT_LIBRARY_PATH: Path = Path.home() / ".templatimator" / "library.json"

DEFAULT_TEMPLATES: list[dict[str, str]] = [
    {
        "name": "Markdown List",
        "content": (
            "# Shopping List for {{ name }}\n"
            "{% for item in items %}\n"
            "- {{ item }}\n"
            "{% endfor %}"
        ),
    },
    {
        "name": "CSV Table",
        "content": (
            "name, item\n"
            "{% for item in items %}\n"
            "{{ name }}, {{ item }}\n"
            "{% endfor %}"
        ),
    },
    {
        "name": "HTML Table",
        "content": (
            '<table border="1">\n'
            "  <tr><th>Name</th><th>Item</th></tr>\n"
            "  {% for item in items %}\n"
            "  <tr><td>{{ name }}</td><td>{{ item }}</td></tr>\n"
            "  {% endfor %}\n"
            "</table>"
        ),
    },
]

DEFAULT_DATA_SETS: list[dict[str, str]] = [
    {
        "name": "Example",
        "content": (
            "{\n"
            '  "name": "Chris",\n'
            '  "items": ["apple", "banana", "carrot"]\n'
            "}"
        ),
    },
]

DEFAULT_STYLES: list[dict[str, str]] = [
    {
        "name": "Templatimator Example",
        "content": """/* All output is wrapped in .templatimator-output */
.templatimator-output {
  font-family: 'Segoe UI', Arial, sans-serif;
  color: #222;
  background: #fff;
  padding: 1em;
  border-radius: 8px;
  max-width: 700px;
  margin: 0 auto;
}
.templatimator-output h1, .templatimator-output h2, .templatimator-output h3 {
  font-family: 'Segoe UI', Arial, sans-serif;
  color: #2d7ff9;
  margin-top: 1.2em;
  margin-bottom: 0.5em;
}
.templatimator-output ul, .templatimator-output ol {
  margin: 0 0 1em 2em;
  padding: 0;
}
.templatimator-output li {
  margin: 0.2em 0;
}
.templatimator-output blockquote {
  border-left: 3px solid #b3c7e6;
  margin: 0.5em 0;
  padding: 0.5em 1em;
  background: #f0f4fa;
  color: #555;
}
.templatimator-output pre {
  background: #eaeaea;
  padding: 0.7em;
  border-radius: 4px;
  overflow-x: auto;
}
.templatimator-output code {
  background: #eaeaea;
  padding: 0.1em 0.3em;
  border-radius: 3px;
  font-size: 0.95em;
}
.templatimator-output table {
  border-collapse: collapse;
  margin: 1em 0;
}
.templatimator-output th, .templatimator-output td {
  border: 1px solid #bbb;
  padding: 0.3em 0.7em;
}
.templatimator-output th {
  background: #f0f4fa;
}
.templatimator-output p {
  margin: 0.5em 0 1em 0;
}
""",
    },
]
