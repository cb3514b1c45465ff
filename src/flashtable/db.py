"""DeckDB: a SQL view over the cards of the open deck.

Uses DuckDB (in-memory) as the query engine and returns :mod:`polars`
DataFrames, ready for a Marimo table.

Usage::

    db = DeckDB(session.document.dataset, session.tracker)

    db.query("SELECT question FROM cards WHERE review_count = 0")
    db.table_view(order_by="review_count")
    db.count_distribution()      # review_count → number of cards
    db.least_reviewed(limit=3)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import duckdb
import polars as pl

if TYPE_CHECKING:
    from flashtable.document import Dataset
    from flashtable.selection import PassTracker


class DeckDB:
    """In-memory DuckDB database over one deck's rows."""

    def __init__(self, dataset: "Dataset", tracker: "PassTracker | None" = None) -> None:
        self.conn: duckdb.DuckDBPyConnection = duckdb.connect(":memory:")
        self.refresh(dataset, tracker)

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def refresh(self, dataset: "Dataset", tracker: "PassTracker | None" = None) -> None:
        """(Re-)load the cards table; call after every review."""
        self._create_schema()
        rows = [
            (
                idx,
                row.question,
                row.answer,
                row.last_reviewed,
                row.count,
                tracker.is_shown(idx) if tracker else False,
            )
            for idx, row in enumerate(dataset.rows)
        ]
        if rows:
            self.conn.executemany("INSERT INTO cards VALUES (?,?,?,?,?,?)", rows)

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE OR REPLACE TABLE cards (
                idx           INTEGER PRIMARY KEY,
                question      VARCHAR,
                answer        VARCHAR,
                last_reviewed VARCHAR,
                review_count  INTEGER,
                shown         BOOLEAN
            )
        """)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, sql: str) -> pl.DataFrame:
        """Run a raw SQL query and return a Polars DataFrame."""
        return self.conn.execute(sql).pl()

    def table_view(self, *, order_by: str = "idx", columns: list[str] | None = None) -> pl.DataFrame:
        cols = ", ".join(columns) if columns else "idx, question, answer, last_reviewed, review_count"
        safe_order = order_by.replace(";", "").replace("'", "")
        return self.conn.execute(f"SELECT {cols} FROM cards ORDER BY {safe_order}, idx").pl()

    def count_distribution(self) -> pl.DataFrame:
        """Number of cards per review count, lowest count first."""
        return self.conn.execute(
            """
            SELECT review_count, COUNT(*) AS cards
            FROM cards
            GROUP BY review_count
            ORDER BY review_count
            """
        ).pl()

    def least_reviewed(self, limit: int = 5) -> pl.DataFrame:
        return self.conn.execute(
            "SELECT idx, question, review_count, last_reviewed FROM cards "
            f"ORDER BY review_count, last_reviewed, idx LIMIT {int(limit)}"
        ).pl()

    def schema_info(self) -> pl.DataFrame:
        """Return DuckDB DESCRIBE output for the cards table."""
        return self.conn.execute("DESCRIBE cards").pl()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "DeckDB":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
