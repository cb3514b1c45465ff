"""Flashcards plugin: review sessions per open document plus the
"Init Flashcards Table" command.

Loaded through :func:`flashtable.plugin.load_plugin`; the host then calls
``on_load(store=..., settings=...)`` and ``on_file_open(path=...)``.
"""

from __future__ import annotations

import random
from datetime import date
from typing import TYPE_CHECKING, Any, Callable

from flashtable.session import ReviewSession
from flashtable.template import insert_template

if TYPE_CHECKING:
    from flashtable.plugin import PluginDescriptor
    from flashtable.settings import FlashcardSettings
    from flashtable.store import DocumentStore

INIT_TABLE_COMMAND = "init-flashcards-table"


class _FlashcardsPlugin:
    def __init__(self, descriptor: "PluginDescriptor") -> None:
        self.descriptor = descriptor
        self._store: "DocumentStore | None" = None
        self._settings: "FlashcardSettings | None" = None
        #: One session per document path; sessions never share rows
        self.sessions: dict[str, ReviewSession] = {}
        self._commands: dict[str, Callable[..., Any]] = {
            INIT_TABLE_COMMAND: self.init_table,
        }

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def on_load(self, store: "DocumentStore", settings: "FlashcardSettings") -> None:
        self._store = store
        self._settings = settings

    def on_file_open(self, path: str) -> ReviewSession:
        return self.open_session(path)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def _require_loaded(self) -> "DocumentStore":
        if self._store is None:
            raise RuntimeError("Plugin not loaded, call on_load first.")
        return self._store

    def open_session(self, path: str, rng: random.Random | None = None) -> ReviewSession:
        """Return the session for *path*, opening the document on first use."""
        store = self._require_loaded()
        session = self.sessions.get(path)
        if session is None:
            session = ReviewSession(path, store, self._settings, rng=rng)
            session.open()
            self.sessions[path] = session
        return session

    def close_session(self, path: str) -> None:
        self.sessions.pop(path, None)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def run_command(self, command: str, **kwargs: Any) -> Any:
        if command not in self._commands:
            raise KeyError(f"Unknown command '{command}' for plugin '{self.descriptor.id}'")
        return self._commands[command](**kwargs)

    def init_table(self, path: str, offset: int | None = None, today: date | None = None) -> str:
        """Insert a fresh flashcard table into *path* at *offset* (end by default).

        The document is created when it does not exist yet. An open session
        for *path* is reloaded so it sees the new table.
        """
        store = self._require_loaded()
        text = store.read(path) if store.exists(path) else ""
        updated = insert_template(text, len(text) if offset is None else offset, today)
        store.write(path, updated)
        if path in self.sessions:
            self.sessions[path].reload()
        return updated


def create_plugin(descriptor: "PluginDescriptor") -> _FlashcardsPlugin:
    return _FlashcardsPlugin(descriptor)
