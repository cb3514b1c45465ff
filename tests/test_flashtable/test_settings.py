"""Unit tests for flashtable.settings."""

from pathlib import Path

import pytest

from flashtable.settings import FlashcardSettings, load_settings, save_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("FLASHTABLE_SHOW_ANSWER", "FLASHTABLE_WRITE_POLICY", "FLASHTABLE_SELECTION"):
        monkeypatch.delenv(name, raising=False)


class TestFlashcardSettings:
    def test_defaults(self):
        settings = FlashcardSettings()
        assert settings.show_answer == "1"
        assert settings.answers_visible is True
        assert settings.write_policy == "review"
        assert settings.writes_on_review is True
        assert settings.selection == "least-reviewed"

    @pytest.mark.parametrize("value, visible", [("1", True), ("0", False), ("yes", False), ("", False)])
    def test_answers_visible(self, value, visible):
        assert FlashcardSettings(show_answer=value).answers_visible is visible

    def test_from_dict_coerces_and_ignores_unknown(self):
        settings = FlashcardSettings.from_dict({"show_answer": 0, "colour": "red"})
        assert settings.show_answer == "0"

    def test_invalid_policy_falls_back(self, capsys):
        settings = FlashcardSettings.from_dict({"write_policy": "sometimes", "selection": "sm2"})
        assert settings.write_policy == "review"
        assert settings.selection == "least-reviewed"
        assert "[warn]" in capsys.readouterr().err

    def test_to_dict(self):
        assert FlashcardSettings(write_policy="save").to_dict() == {
            "show_answer": "1",
            "write_policy": "save",
            "selection": "least-reviewed",
        }


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_settings(tmp_path / "nope.yaml") == FlashcardSettings()

    def test_none_path_gives_defaults(self):
        assert load_settings(None) == FlashcardSettings()

    def test_reads_yaml(self, tmp_path: Path):
        path = tmp_path / "flashcards.yaml"
        path.write_text('show_answer: "0"\nwrite_policy: save\nselection: random\n', encoding="utf-8")
        settings = load_settings(path)
        assert settings == FlashcardSettings(show_answer="0", write_policy="save", selection="random")

    def test_invalid_yaml_gives_defaults(self, tmp_path: Path, capsys):
        path = tmp_path / "flashcards.yaml"
        path.write_text("show_answer: [unclosed\n", encoding="utf-8")
        assert load_settings(path) == FlashcardSettings()
        assert "[warn]" in capsys.readouterr().err

    def test_non_mapping_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "flashcards.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert load_settings(path) == FlashcardSettings()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "flashcards.yaml"
        path.write_text('show_answer: "1"\n', encoding="utf-8")
        monkeypatch.setenv("FLASHTABLE_SHOW_ANSWER", "0")
        monkeypatch.setenv("FLASHTABLE_WRITE_POLICY", "save")
        settings = load_settings(path)
        assert settings.show_answer == "0"
        assert settings.write_policy == "save"


class TestSaveSettings:
    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "flashcards.yaml"
        original = FlashcardSettings(show_answer="0", write_policy="save", selection="random")
        save_settings(original, path)
        assert load_settings(path) == original
