"""Unit tests for flashtable.session.ReviewSession."""

import random
import textwrap
from datetime import date
from pathlib import Path

import pytest

from flashtable.document import parse_document
from flashtable.session import ReviewSession
from flashtable.settings import FlashcardSettings
from flashtable.store import LocalVault

DECK = textwrap.dedent("""\
    ---
    fileType: flashcards
    ---
    | Question | Answer | Last Review | Count |
    | -- | -- | -- | -- |
    | A | B | 2024-01-01 | 0 |
    | C | D | 2024-01-01 | 0 |""")

TODAY = date(2024, 4, 2)


class FlakyVault(LocalVault):
    """LocalVault whose writes fail while ``fail`` is set."""

    def __init__(self, vault_dir: Path) -> None:
        super().__init__(vault_dir)
        self.fail = False
        self.writes = 0

    def write(self, path: str, text: str) -> None:
        if self.fail:
            raise OSError("disk full")
        self.writes += 1
        super().write(path, text)


@pytest.fixture()
def store(tmp_path: Path) -> FlakyVault:
    (tmp_path / "deck.md").write_text(DECK, encoding="utf-8")
    (tmp_path / "plain.md").write_text("# Just a note\n", encoding="utf-8")
    return FlakyVault(tmp_path)


def _session(store, **settings) -> ReviewSession:
    session = ReviewSession(
        "deck.md",
        store,
        FlashcardSettings(**settings),
        rng=random.Random(0),
        today=lambda: TODAY,
    )
    session.open()
    return session


def _rows_on_disk(store) -> list[list[str]]:
    return [r.cells() for r in parse_document(store.read("deck.md")).dataset.rows]


# ---------------------------------------------------------------------------
# Opening
# ---------------------------------------------------------------------------


class TestOpen:
    def test_ready_deck_has_current_card(self, store: FlakyVault):
        session = _session(store)
        assert session.status == "ready"
        assert session.current is not None
        assert session.current.question in {"A", "C"}
        assert session.message == []

    def test_not_a_deck(self, store: FlakyVault):
        session = ReviewSession("plain.md", store)
        assert session.open() == "not-flashcards"
        assert session.current is None
        assert session.message == ["Unable to find flashcards", "Try open the correct file and reload"]

    def test_empty_deck(self, store: FlakyVault):
        store.write("empty.md", "---\nfileType: flashcards\n---\n| Q | A | D | C |\n| -- | -- | -- | -- |")
        session = ReviewSession("empty.md", store)
        assert session.open() == "empty"
        assert session.current is None
        assert session.skip() is None
        assert session.next() is None

    def test_missing_file_raises(self, store: FlakyVault):
        with pytest.raises(FileNotFoundError):
            ReviewSession("ghost.md", store).open()

    def test_unopened_session(self, store: FlakyVault):
        session = ReviewSession("deck.md", store)
        assert session.status == "not-flashcards"
        assert session.front_matter == {}
        assert session.rows == []
        assert session.save() is False

    def test_reload_picks_up_disk_changes(self, store: FlakyVault):
        session = _session(store)
        store.write("deck.md", DECK.replace("| C | D |", "| E | F |"))
        session.reload()
        assert [r.question for r in session.rows] == ["A", "E"]


# ---------------------------------------------------------------------------
# Answer visibility
# ---------------------------------------------------------------------------


class TestAnswerVisibility:
    def test_shown_immediately(self, store: FlakyVault):
        assert _session(store, show_answer="1").answer_visible is True

    def test_hidden_until_revealed(self, store: FlakyVault):
        session = _session(store, show_answer="0")
        assert session.answer_visible is False
        session.reveal()
        assert session.answer_visible is True

    def test_hidden_again_after_skip(self, store: FlakyVault):
        session = _session(store, show_answer="0")
        session.reveal()
        session.skip()
        assert session.answer_visible is False


# ---------------------------------------------------------------------------
# Skip / next
# ---------------------------------------------------------------------------


class TestSkipAndNext:
    def test_skip_does_not_mutate_or_write(self, store: FlakyVault):
        session = _session(store)
        first = session.current_index
        session.skip()
        assert session.current_index != first
        assert all(r.review_count == "0" for r in session.rows)
        assert store.writes == 0

    def test_next_marks_reviewed_and_moves_on(self, store: FlakyVault):
        session = _session(store, write_policy="save")
        first = session.current_index
        session.next()
        assert session.rows[first].review_count == "1"
        assert session.rows[first].last_reviewed == "2024-04-02"
        assert session.current_index != first

    def test_review_policy_writes_every_review(self, store: FlakyVault):
        session = _session(store, write_policy="review")
        first = session.current_index
        session.next()
        assert store.writes == 1
        assert _rows_on_disk(store)[first][3] == "1"
        assert session.dirty is False

    def test_save_policy_writes_on_save_only(self, store: FlakyVault):
        session = _session(store, write_policy="save")
        session.next()
        assert store.writes == 0
        assert session.dirty is True
        assert session.save() is True
        assert store.writes == 1
        assert session.dirty is False
        assert sorted(r[3] for r in _rows_on_disk(store)) == ["0", "1"]

    def test_whole_pass_then_repeat(self, store: FlakyVault):
        session = _session(store)
        seen = {session.current_index}
        session.next()
        seen.add(session.current_index)
        assert seen == {0, 1}
        session.next()
        assert [r.review_count for r in session.rows] == ["1", "1"]

    def test_random_policy(self, store: FlakyVault):
        session = _session(store, selection="random")
        for _ in range(5):
            assert session.skip() is not None
        assert session.tracker.shown == {}

    def test_front_matter_preserved_on_write(self, store: FlakyVault):
        store.write("deck.md", DECK.replace("fileType: flashcards", "fileType: flashcards\nauthor: me"))
        store.writes = 0
        session = _session(store)
        session.next()
        assert "author: me" in store.read("deck.md")


# ---------------------------------------------------------------------------
# Write failures
# ---------------------------------------------------------------------------


class TestWriteFailure:
    def test_failed_write_keeps_mutation(self, store: FlakyVault):
        session = _session(store)
        first = session.current_index
        store.fail = True
        with pytest.raises(OSError):
            session.next()
        assert session.rows[first].review_count == "1"
        assert session.dirty is True
        assert _rows_on_disk(store)[first][3] == "0"

    def test_retry_persists_in_memory_state(self, store: FlakyVault):
        session = _session(store)
        first = session.current_index
        store.fail = True
        with pytest.raises(OSError):
            session.next()
        store.fail = False
        assert session.save() is True
        assert _rows_on_disk(store)[first] == [session.rows[first].question, session.rows[first].answer, "2024-04-02", "1"]
        assert session.dirty is False

    def test_next_after_failure_does_not_count_twice(self, store: FlakyVault):
        session = _session(store)
        first = session.current_index
        store.fail = True
        with pytest.raises(OSError):
            session.next()
        store.fail = False
        session.next()
        assert session.rows[first].review_count == "1"
        assert _rows_on_disk(store)[first][3] == "1"
        assert session.dirty is False
        assert session.current_index != first

    def test_save_policy_still_counts_each_next(self, store: FlakyVault):
        session = _session(store, write_policy="save")
        session.next()
        session.next()
        assert [r.review_count for r in session.rows] == ["1", "1"]


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


class TestIsolation:
    def test_two_sessions_do_not_share_rows(self, store: FlakyVault):
        store.write("other.md", DECK)
        a = _session(store, write_policy="save")
        b = ReviewSession("other.md", store, FlashcardSettings(write_policy="save"), rng=random.Random(1))
        b.open()
        a.next()
        assert all(r.review_count == "0" for r in b.rows)
        assert a.tracker is not b.tracker
