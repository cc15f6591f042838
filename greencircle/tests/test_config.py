"""
Tests for environment-driven settings and the CLI.
"""

import pytest

from ..bots.personality import AdjacencyScope, HOARDER
from ..cli import main
from ..config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "GREENCIRCLE_PERSONALITY",
            "GREENCIRCLE_LOG_LEVEL",
            "GREENCIRCLE_ADJACENCY_SCOPE",
            "GREENCIRCLE_SAFE_RELEASE_THRESHOLD",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.personality == "balanced"
        assert settings.build_personality().adjacency_scope == AdjacencyScope.SELF

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GREENCIRCLE_PERSONALITY", "hoarder")
        monkeypatch.setenv("GREENCIRCLE_ADJACENCY_SCOPE", "self_and_opponent")
        monkeypatch.setenv("GREENCIRCLE_SAFE_RELEASE_THRESHOLD", "7")

        personality = Settings.from_env().build_personality()
        assert personality.name == HOARDER.name
        assert personality.adjacency_scope == AdjacencyScope.SELF_AND_OPPONENT
        assert personality.safe_release_threshold == 7

    def test_bad_scope(self):
        with pytest.raises(ValueError):
            Settings(adjacency_scope="everyone").build_personality()


class TestCLI:
    """Tests for the decide command."""

    def test_decide_prints_action(self, tmp_path, capsys, release_snapshot_text):
        snapshot = tmp_path / "turn.txt"
        snapshot.write_text(release_snapshot_text, encoding="utf-8")

        main(["decide", str(snapshot)])

        assert capsys.readouterr().out.strip() == "RELEASE 3"

    def test_decide_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["decide", str(tmp_path / "missing.txt")])
        assert exc_info.value.code == 1

    def test_decide_protocol_error(self, tmp_path):
        snapshot = tmp_path / "turn.txt"
        snapshot.write_text("NAP\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["decide", str(snapshot)])
        assert exc_info.value.code == 2

    def test_unknown_personality_exits_cleanly(self, tmp_path, capsys, release_snapshot_text):
        snapshot = tmp_path / "turn.txt"
        snapshot.write_text(release_snapshot_text, encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--personality", "reckless", "decide", str(snapshot)])
        assert exc_info.value.code == 1
        assert "reckless" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "name, value",
        [
            ("GREENCIRCLE_SAFE_RELEASE_THRESHOLD", "two"),
            ("GREENCIRCLE_ADJACENCY_SCOPE", "everyone"),
        ],
    )
    def test_bad_environment_exits_cleanly(self, monkeypatch, tmp_path, capsys, release_snapshot_text, name, value):
        monkeypatch.setenv(name, value)
        snapshot = tmp_path / "turn.txt"
        snapshot.write_text(release_snapshot_text, encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["decide", str(snapshot)])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")
