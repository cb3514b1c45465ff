"""Document store: how the plugin reads and writes notes.

The review session only talks to a :class:`DocumentStore`, so a host
application can plug in its own file API. :class:`LocalVault` is the
filesystem implementation used by the marimo app and the tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from flashtable.document import parse_document


@runtime_checkable
class DocumentStore(Protocol):
    """Read/write access to documents, keyed by a vault-relative path."""

    def read(self, path: str) -> str:
        """Return the full text of *path*; raise ``FileNotFoundError`` if absent."""
        ...

    def write(self, path: str, text: str) -> None:
        """Replace the full text of *path*."""
        ...

    def exists(self, path: str) -> bool:
        ...


class LocalVault:
    """A directory of markdown notes on the local filesystem."""

    def __init__(self, vault_dir: Path | str) -> None:
        self.vault_dir = Path(vault_dir)

    def _resolve(self, path: str) -> Path:
        return self.vault_dir / path

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write(self, path: str, text: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def list_documents(self) -> list[str]:
        """Vault-relative paths of every ``.md`` file, sorted."""
        return [p.relative_to(self.vault_dir).as_posix() for p in sorted(self.vault_dir.glob("**/*.md"))]

    def list_decks(self) -> list[str]:
        """Documents whose front-matter declares ``fileType: flashcards``."""
        return [p for p in self.list_documents() if parse_document(self.read(p)).is_flashcards]
