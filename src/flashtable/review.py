"""Apply a "reviewed" event to a flashcard row."""

from __future__ import annotations

from datetime import date

from flashtable.document import Dataset


def mark_reviewed(dataset: Dataset, index: int, today: date | None = None) -> None:
    """Stamp row *index* with *today* and add one to its review count.

    Question, answer and the session's shown flags are left alone. A count
    cell that is not a whole number is treated as ``0``.
    """
    row = dataset.rows[index]
    row.last_reviewed = (today or date.today()).isoformat()
    row.review_count = str(row.count + 1)
