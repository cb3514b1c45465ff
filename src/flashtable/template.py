"""Skeleton for a new flashcard table (the "Init Flashcards Table" command)."""

from __future__ import annotations

from datetime import date

HEADER_LINE = "| Question | Answer | Last Review | Count |"
SEPARATOR_LINE = "| -- | -- | -- | -- |"
DEFAULT_ROWS = 5


def init_template(today: date | None = None, rows: int = DEFAULT_ROWS) -> str:
    """Return a fresh deck with *rows* placeholder cards dated *today*."""
    stamp = (today or date.today()).isoformat()
    lines = ["---", "fileType: flashcards", "---", HEADER_LINE, SEPARATOR_LINE]
    lines += [f"| Question {n} | Answer {n} | {stamp} | 0 |" for n in range(1, rows + 1)]
    return "\n".join(lines)


def insert_template(
    text: str,
    offset: int,
    today: date | None = None,
    rows: int = DEFAULT_ROWS,
) -> str:
    """Insert the template into *text* at character *offset* (the cursor).

    A line break is added first when the cursor is not at the start of a line,
    so the opening ``---`` gets a line of its own.
    """
    offset = max(0, min(offset, len(text)))
    before = text[:offset]
    if before and not before.endswith("\n"):
        before += "\n"
    return before + init_template(today, rows) + text[offset:]
