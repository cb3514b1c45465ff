"""Row selection: which flashcard to show next.

Two policies are available:

``least-reviewed`` (default)
    No row repeats until every row has been shown once in the current pass.
    Among the rows not yet shown, only those with the lowest review count are
    candidates; one of them is picked at random and flagged as shown
    immediately.

``random``
    Uniform pick over all rows with no memory of earlier picks.

Shown flags live in a :class:`PassTracker` keyed by row index, never in the
rows themselves, so they are never written back to the document.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from flashtable.document import Dataset

POLICY_LEAST_REVIEWED = "least-reviewed"
POLICY_RANDOM = "random"
POLICIES = (POLICY_LEAST_REVIEWED, POLICY_RANDOM)


@dataclass
class PassTracker:
    """Per-session "shown this pass" flags, keyed by row index."""

    shown: dict[int, bool] = field(default_factory=dict)

    def sync(self, size: int) -> None:
        """Give every row in ``range(size)`` a flag and drop stale indices."""
        self.shown = {i: self.shown.get(i, False) for i in range(size)}

    def is_shown(self, index: int) -> bool:
        return self.shown.get(index, False)

    def mark_shown(self, index: int) -> None:
        self.shown[index] = True

    def reset(self) -> None:
        self.shown = {i: False for i in self.shown}

    def unshown(self) -> list[int]:
        return [i for i, seen in sorted(self.shown.items()) if not seen]


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def candidates(dataset: Dataset, tracker: PassTracker) -> list[int]:
    """Unshown rows whose review count equals the minimum among unshown rows."""
    pending = tracker.unshown()
    if not pending:
        return []
    lowest = min(dataset.rows[i].count for i in pending)
    return [i for i in pending if dataset.rows[i].count == lowest]


def select_next(
    dataset: Dataset,
    tracker: PassTracker,
    rng: random.Random | None = None,
) -> int:
    """Pick the next row index with the least-reviewed, no-repeat policy.

    Starts a new pass (all flags cleared) when every row has been shown.
    The returned row is flagged as shown before this function returns.

    Raises
    ------
    ValueError
        When *dataset* has no rows; callers check for that first.
    """
    if not dataset.rows:
        raise ValueError("cannot select a row from an empty dataset")

    tracker.sync(len(dataset.rows))
    if not tracker.unshown():
        tracker.reset()

    index = _rng(rng).choice(candidates(dataset, tracker))
    tracker.mark_shown(index)
    return index


def select_random(dataset: Dataset, rng: random.Random | None = None) -> int:
    """Uniform pick over all rows, with no memory of earlier picks."""
    if not dataset.rows:
        raise ValueError("cannot select a row from an empty dataset")
    return _rng(rng).randrange(len(dataset.rows))


def select(
    policy: str,
    dataset: Dataset,
    tracker: PassTracker,
    rng: random.Random | None = None,
) -> int:
    """Dispatch to the selection function registered for *policy*."""
    if policy == POLICY_RANDOM:
        return select_random(dataset, rng)
    if policy == POLICY_LEAST_REVIEWED:
        return select_next(dataset, tracker, rng)
    raise ValueError(f"unknown selection policy: {policy!r}")
