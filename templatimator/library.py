"""Persistent library of named templates, data sets and stylesheets.

The library is an explicit store object passed to whoever needs it; there
is no module-level state. It is backed by a single JSON file::

    {
      "template": [{"name": "...", "content": "..."}],
      "data": [...],
      "style": [...]
    }

Kinds that are missing or empty are seeded from the defaults in
``templatimator.config`` when the library is loaded.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path

from templatimator.config import DEFAULT_DATA_SETS, DEFAULT_STYLES, DEFAULT_TEMPLATES
from templatimator.exceptions import DataValidationError, StorageError, UserInputError

logger = logging.getLogger(__name__)


class SnippetKind(str, Enum):
    """Kinds of snippet the library stores."""

    TEMPLATE = "template"
    DATA = "data"
    STYLE = "style"


@dataclass(frozen=True)
class Snippet:
    """A named piece of text."""

    name: str
    content: str


_DEFAULTS: dict[SnippetKind, list[dict[str, str]]] = {
    SnippetKind.TEMPLATE: DEFAULT_TEMPLATES,
    SnippetKind.DATA: DEFAULT_DATA_SETS,
    SnippetKind.STYLE: DEFAULT_STYLES,
}


def _parse_entries(kind: SnippetKind, raw: object, path: Path) -> list[Snippet]:
    if not isinstance(raw, list):
        raise DataValidationError(
            f"Library entry '{kind.value}' must be a list",
            context={"path": str(path)},
        )
    snippets: list[Snippet] = []
    for entry in raw:
        if (
            not isinstance(entry, dict)
            or not isinstance(entry.get("name"), str)
            or not isinstance(entry.get("content"), str)
        ):
            raise DataValidationError(
                f"Malformed '{kind.value}' entry in library",
                context={"path": str(path), "entry": repr(entry)[:80]},
            )
        snippets.append(Snippet(entry["name"], entry["content"]))
    return snippets


class SnippetLibrary:
    """JSON-file backed store of named snippets.

    Parameters
    ----------
    path : Path
        Location of the library file. It is created on the first
        :meth:`flush`.

    Examples
    --------
    >>> import tempfile
    >>> lib = SnippetLibrary(Path(tempfile.mkdtemp()) / "library.json").load()
    >>> [s.name for s in lib.list(SnippetKind.STYLE)]
    ['Templatimator Example']
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._entries: dict[SnippetKind, list[Snippet]] = {
            kind: [] for kind in SnippetKind
        }

    def load(self) -> SnippetLibrary:
        """Read the library file and seed defaults for empty kinds.

        Returns
        -------
        SnippetLibrary
            ``self``, for chaining.

        Raises
        ------
        DataValidationError
            If the file is not valid JSON or has the wrong shape.
        StorageError
            If the file exists but cannot be read.
        """
        raw: dict[str, object] = {}
        if self.path.exists():
            try:
                text = self.path.read_text(encoding="utf-8")
            except OSError as exc:
                raise StorageError(
                    f"Cannot read library: {exc}", context={"path": str(self.path)}
                ) from exc
            try:
                decoded = json.loads(text) if text.strip() else {}
            except json.JSONDecodeError as exc:
                raise DataValidationError(
                    f"Library file is not valid JSON: {exc}",
                    context={"path": str(self.path)},
                ) from exc
            if not isinstance(decoded, dict):
                raise DataValidationError(
                    "Library file must contain a JSON object",
                    context={"path": str(self.path)},
                )
            raw = decoded
        for kind in SnippetKind:
            entries = _parse_entries(kind, raw.get(kind.value, []), self.path)
            if not entries:
                logger.debug("Seeding default %s snippets", kind.value)
                entries = [Snippet(d["name"], d["content"]) for d in _DEFAULTS[kind]]
            self._entries[kind] = entries
        return self

    def list(self, kind: SnippetKind) -> list[Snippet]:
        """Return the snippets of ``kind`` in stored order."""
        return list(self._entries[SnippetKind(kind)])

    def get(self, kind: SnippetKind, name: str) -> Snippet:
        """Return the snippet called ``name``.

        Raises
        ------
        UserInputError
            If no snippet of that kind has that name.
        """
        for snippet in self._entries[SnippetKind(kind)]:
            if snippet.name == name:
                return snippet
        raise UserInputError(
            f"No {SnippetKind(kind).value} named {name!r}",
            context={"available": [s.name for s in self._entries[SnippetKind(kind)]]},
        )

    def save(self, kind: SnippetKind, name: str, content: str) -> Snippet:
        """Insert or replace the snippet called ``name``.

        Raises
        ------
        UserInputError
            If ``name`` is blank.
        """
        name = name.strip()
        if not name:
            raise UserInputError(
                f"{SnippetKind(kind).value.capitalize()} name required"
            )
        snippet = Snippet(name, content)
        entries = self._entries[SnippetKind(kind)]
        for index, existing in enumerate(entries):
            if existing.name == name:
                entries[index] = snippet
                break
        else:
            entries.append(snippet)
        return snippet

    def delete(self, kind: SnippetKind, name: str) -> None:
        """Remove the snippet called ``name``.

        Raises
        ------
        UserInputError
            If no snippet of that kind has that name.
        """
        snippet = self.get(kind, name)
        self._entries[SnippetKind(kind)].remove(snippet)

    def flush(self) -> None:
        """Write the library to :attr:`path`.

        Raises
        ------
        StorageError
            If the file cannot be written.
        """
        payload = {
            kind.value: [asdict(snippet) for snippet in entries]
            for kind, entries in self._entries.items()
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(
                f"Cannot write library: {exc}", context={"path": str(self.path)}
            ) from exc
        logger.info("Saved snippet library to %s", self.path)
