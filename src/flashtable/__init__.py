"""Flashcards-from-table plugin library."""

from flashtable.db import DeckDB
from flashtable.document import Dataset, ParsedDocument, Row, is_link, parse_document
from flashtable.review import mark_reviewed
from flashtable.selection import PassTracker, select_next, select_random
from flashtable.serializer import serialize, serialize_document
from flashtable.session import ReviewSession
from flashtable.settings import FlashcardSettings, load_settings
from flashtable.store import LocalVault
from flashtable.template import init_template

__all__ = [
    "Dataset",
    "DeckDB",
    "FlashcardSettings",
    "LocalVault",
    "ParsedDocument",
    "PassTracker",
    "ReviewSession",
    "Row",
    "init_template",
    "is_link",
    "load_settings",
    "mark_reviewed",
    "parse_document",
    "select_next",
    "select_random",
    "serialize",
    "serialize_document",
]
