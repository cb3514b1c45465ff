"""Write a parsed flashcard document back to markdown text."""

from __future__ import annotations

from flashtable.document import FRONT_MATTER_MARKER, Dataset, ParsedDocument, Row


def format_row(row: Row) -> str:
    return "| " + " | ".join(row.cells()) + " |"


def serialize(lines: list[str], meta_end: int, dataset: Dataset, newline: str = "\n") -> str:
    """Rebuild document text from the original *lines* and the in-memory rows.

    The front-matter body and the header/separator lines are copied verbatim
    from *lines*; only the table rows come from *dataset*. Lines are joined
    with *newline*.
    """
    if meta_end < 0:
        raise ValueError("document has no closing front-matter marker")

    out = [FRONT_MATTER_MARKER]
    out.extend(lines[1:meta_end])
    out.append(FRONT_MATTER_MARKER)
    out.extend(lines[meta_end + 1 : meta_end + 3])
    out.extend(format_row(row) for row in dataset.rows)
    return newline.join(out)


def serialize_document(doc: ParsedDocument) -> str:
    return serialize(doc.lines, doc.meta_end, doc.dataset, doc.newline)
