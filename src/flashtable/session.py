"""ReviewSession: the state behind one open flashcard view.

A session owns the parsed document, the shown flags of the current pass and
the card on screen. The view calls :meth:`skip`, :meth:`next`,
:meth:`reveal`, :meth:`save` and :meth:`reload`; the session calls the store
to read and write the document.

Usage::

    session = ReviewSession("spanish.md", LocalVault(vault_dir), settings)
    session.open()
    if session.status == "ready":
        print(session.current.question)
        session.next()      # counts the card as reviewed, shows another
"""

from __future__ import annotations

import random
from datetime import date
from typing import Callable

from flashtable.document import STATUS_NOT_FLASHCARDS, STATUS_READY, ParsedDocument, Row, parse_document
from flashtable.review import mark_reviewed
from flashtable.selection import PassTracker, select
from flashtable.serializer import serialize_document
from flashtable.settings import FlashcardSettings
from flashtable.store import DocumentStore

NOT_FOUND_MESSAGE = "Unable to find flashcards"
RELOAD_HINT = "Try open the correct file and reload"


class ReviewSession:
    """Review state for a single document."""

    def __init__(
        self,
        path: str,
        store: DocumentStore,
        settings: FlashcardSettings | None = None,
        *,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.path = path
        self.store = store
        self.settings = settings or FlashcardSettings()
        self.rng = rng or random.Random()
        self.today = today

        self.document: ParsedDocument | None = None
        self.tracker = PassTracker()
        self.current_index: int | None = None
        self.answer_visible = self.settings.answers_visible
        #: In-memory rows differ from what was last written to the store
        self.dirty = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def open(self) -> str:
        """Read and parse the document, then pick the first card.

        Returns the session status. A missing document raises
        ``FileNotFoundError`` from the store.
        """
        self.document = parse_document(self.store.read(self.path))
        self.tracker = PassTracker()
        self.current_index = None
        self.dirty = False
        if self.status == STATUS_READY:
            self._advance()
        else:
            self.answer_visible = self.settings.answers_visible
        return self.status

    def reload(self) -> str:
        return self.open()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def status(self) -> str:
        if self.document is None:
            return STATUS_NOT_FLASHCARDS
        return self.document.status

    @property
    def ready(self) -> bool:
        return self.status == STATUS_READY

    @property
    def front_matter(self) -> dict[str, str]:
        return self.document.front_matter if self.document else {}

    @property
    def rows(self) -> list[Row]:
        return self.document.dataset.rows if self.document else []

    @property
    def current(self) -> Row | None:
        if not self.ready or self.current_index is None:
            return None
        return self.rows[self.current_index]

    @property
    def message(self) -> list[str]:
        """User-facing text for documents that cannot be reviewed."""
        return [] if self.ready else [NOT_FOUND_MESSAGE, RELOAD_HINT]

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def reveal(self) -> None:
        if self.ready:
            self.answer_visible = True

    def skip(self) -> Row | None:
        """Show another card without counting the current one as reviewed."""
        if not self.ready:
            return None
        self._advance()
        return self.current

    def next(self) -> Row | None:
        """Count the current card as reviewed, then show another card.

        With the ``review`` write policy the document is written before the
        next card is chosen. If that write fails the exception propagates and
        the review stays in memory, so a later :meth:`save` persists it.
        Calling :meth:`next` again after such a failure retries the write
        without counting the card a second time.
        """
        if not self.ready or self.current_index is None:
            return None
        if self.settings.writes_on_review and self.dirty:
            self.save()
        else:
            mark_reviewed(self.document.dataset, self.current_index, self.today())
            self.dirty = True
            if self.settings.writes_on_review:
                self.save()
        self._advance()
        return self.current

    def save(self) -> bool:
        """Write the in-memory deck back to the store.

        Returns ``False`` without writing when the document is not a deck.
        """
        if self.document is None or not self.document.is_flashcards:
            return False
        self.store.write(self.path, serialize_document(self.document))
        self.dirty = False
        return True

    def _advance(self) -> None:
        self.current_index = select(self.settings.selection, self.document.dataset, self.tracker, self.rng)
        self.answer_visible = self.settings.answers_visible
