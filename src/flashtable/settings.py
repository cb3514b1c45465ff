"""Plugin settings: YAML file on disk, overridable from the environment.

Settings file (``flashcards.yaml`` next to the plugin descriptor)::

    show_answer: "1"          # "1" reveals answers immediately
    write_policy: review      # "review" or "save"
    selection: least-reviewed # "least-reviewed" or "random"

Environment variables (take precedence over the file):
    FLASHTABLE_SHOW_ANSWER   – ``show_answer``
    FLASHTABLE_WRITE_POLICY  – ``write_policy``
    FLASHTABLE_SELECTION     – ``selection``
"""

from __future__ import annotations

import os
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from flashtable.selection import POLICIES, POLICY_LEAST_REVIEWED

WRITE_ON_REVIEW = "review"
WRITE_ON_SAVE = "save"
WRITE_POLICIES = (WRITE_ON_REVIEW, WRITE_ON_SAVE)

_ENV_PREFIX = "FLASHTABLE_"


@dataclass
class FlashcardSettings:
    show_answer: str = "1"
    write_policy: str = WRITE_ON_REVIEW
    selection: str = POLICY_LEAST_REVIEWED

    @property
    def answers_visible(self) -> bool:
        """``True`` when answers are shown without an explicit reveal."""
        return self.show_answer == "1"

    @property
    def writes_on_review(self) -> bool:
        return self.write_policy == WRITE_ON_REVIEW

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FlashcardSettings":
        known = {f.name for f in fields(cls)}
        settings = cls(**{k: str(v) for k, v in data.items() if k in known and v is not None})
        settings._validate()
        return settings

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def _validate(self) -> None:
        if self.write_policy not in WRITE_POLICIES:
            print(f"[warn] Unknown write_policy {self.write_policy!r}, using {WRITE_ON_REVIEW!r}", file=sys.stderr)
            self.write_policy = WRITE_ON_REVIEW
        if self.selection not in POLICIES:
            print(f"[warn] Unknown selection {self.selection!r}, using {POLICY_LEAST_REVIEWED!r}", file=sys.stderr)
            self.selection = POLICY_LEAST_REVIEWED


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for f in fields(FlashcardSettings):
        value = os.getenv(_ENV_PREFIX + f.name.upper())
        if value is not None:
            overrides[f.name] = value
    return overrides


def load_settings(path: Path | str | None = None) -> FlashcardSettings:
    """Load settings from *path* (when it exists) and the environment.

    A missing or unreadable file falls back to the defaults.
    """
    data: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        try:
            loaded = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            print(f"[warn] Failed to read settings {Path(path).name}: {exc}", file=sys.stderr)
            loaded = {}
        if isinstance(loaded, dict):
            data.update(loaded)
        else:
            print(f"[warn] Settings file {Path(path).name} is not a mapping", file=sys.stderr)
    data.update(_env_overrides())
    return FlashcardSettings.from_dict(data)


def save_settings(settings: FlashcardSettings, path: Path | str) -> None:
    Path(path).write_text(yaml.safe_dump(settings.to_dict(), sort_keys=False), encoding="utf-8")
