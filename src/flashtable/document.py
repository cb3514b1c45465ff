"""Front-matter and markdown-table parser for flashcard documents.

A flashcard document looks like::

    ---
    fileType: flashcards
    ---
    | Question | Answer | Last Review | Count |
    | -- | -- | -- | -- |
    | Hola | Hello | 2024-01-01 | 0 |

Parsing never raises: documents that are not decks (no closing ``---``,
wrong ``fileType``, empty text) come back with an empty dataset and a
``status`` the view can render.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

FRONT_MATTER_MARKER = "---"
DECK_FILE_TYPE = "flashcards"

STATUS_READY = "ready"
STATUS_NOT_FLASHCARDS = "not-flashcards"
STATUS_EMPTY = "empty"

# [label](target)
_LINK_RE = re.compile(r"^\[([^\]]*)\]\(([^)]*)\)$")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class Row:
    """One flashcard: the four persisted cells of a table row."""

    question: str
    answer: str
    last_reviewed: str = ""
    review_count: str = "0"

    @classmethod
    def from_cells(cls, cells: list[str]) -> "Row":
        padded = list(cells[:4]) + [""] * (4 - len(cells[:4]))
        return cls(*padded)

    @property
    def count(self) -> int:
        """Numeric review count; ``0`` when the cell is not a whole number."""
        text = self.review_count.strip()
        return int(text) if text.isdecimal() else 0

    def cells(self) -> list[str]:
        return [self.question, self.answer, self.last_reviewed, self.review_count]

    def to_dict(self) -> dict[str, str]:
        return {
            "question": self.question,
            "answer": self.answer,
            "last_reviewed": self.last_reviewed,
            "review_count": self.review_count,
        }


@dataclass
class Dataset:
    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class ParsedDocument:
    """Result of :func:`parse_document`.

    ``lines`` keeps the original text so the serializer can reproduce the
    front-matter, header and separator lines byte-for-byte.
    """

    lines: list[str]
    meta_end: int
    #: Line ending found in the source text, reused when writing back
    newline: str = "\n"
    front_matter: dict[str, str] = field(default_factory=dict)
    dataset: Dataset = field(default_factory=Dataset)

    @property
    def is_flashcards(self) -> bool:
        return self.meta_end > 0 and self.front_matter.get("fileType") == DECK_FILE_TYPE

    @property
    def status(self) -> str:
        if not self.is_flashcards:
            return STATUS_NOT_FLASHCARDS
        if not self.dataset.rows:
            return STATUS_EMPTY
        return STATUS_READY


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Other Unicode line separators stay inside their cell.
    """
    return [line.removesuffix("\r") for line in text.split("\n")]


def find_meta_end(lines: list[str]) -> int:
    """Index of the *last* ``---`` line after the opening marker, or ``-1``.

    The last occurrence wins, so a ``---`` line written below the table moves
    the marker and the table is no longer found.
    """
    meta_end = -1
    for index, line in enumerate(lines):
        if index > 0 and line == FRONT_MATTER_MARKER:
            meta_end = index
    return meta_end


def parse_front_matter(lines: list[str], meta_end: int) -> dict[str, str]:
    """Split each line in ``lines[1:meta_end]`` on the first ``": "``.

    Lines without the separator become a key with an empty value.
    """
    meta: dict[str, str] = {}
    for line in lines[1:meta_end] if meta_end > 0 else []:
        key, _, value = line.partition(": ")
        meta[key] = value
    return meta


def split_cells(line: str) -> list[str]:
    """Split a table line on ``|``, strip each cell, drop empty cells."""
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def parse_table(lines: list[str]) -> Dataset:
    """Build a :class:`Dataset` from the lines that follow the front-matter.

    Offset 0 is the header row and offset 1 the separator row, which is
    skipped. Blank lines are skipped but still count towards the offset.
    """
    dataset = Dataset()
    for offset, line in enumerate(lines):
        if offset == 1 or line == "":
            continue
        cells = split_cells(line)
        if offset == 0:
            dataset.headers = cells
        elif cells:
            dataset.rows.append(Row.from_cells(cells))
    return dataset


def parse_document(text: str) -> ParsedDocument:
    """Parse raw document *text* into front-matter and a flashcard dataset."""
    lines = split_lines(text)
    meta_end = find_meta_end(lines)
    doc = ParsedDocument(
        lines=lines,
        meta_end=meta_end,
        newline="\r\n" if "\r\n" in text else "\n",
        front_matter=parse_front_matter(lines, meta_end),
    )
    if doc.is_flashcards:
        doc.dataset = parse_table(lines[meta_end + 1 :])
    return doc


# ---------------------------------------------------------------------------
# Link cells
# ---------------------------------------------------------------------------


def is_link(cell: str) -> bool:
    """A cell is rendered as a link when it starts with ``[``."""
    return cell.startswith("[")


def parse_link(cell: str) -> tuple[str, str] | None:
    """Return ``(label, target)`` for a ``[label](target)`` cell, else ``None``."""
    match = _LINK_RE.match(cell.strip())
    if not match:
        return None
    return match.group(1), match.group(2)
