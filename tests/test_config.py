"""
Configuration Tests
===================
"""

import pytest
from pydantic import ValidationError

from logo_replay.config import Settings, load_config


class TestConfig:
    """Tests for load_config."""

    def test_defaults(self, tmp_path):
        settings = load_config(str(tmp_path / "missing.yaml"))
        assert settings.history.url == "http://localhost:3000/api/v1/history"
        assert settings.playback.advance_interval_ms == 50
        assert settings.playback.refresh_interval_seconds == 300.0
        assert settings.viewer.start_url == ""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "history:\n"
            "  base_url: http://logo.example:3000/\n"
            "playback:\n"
            "  advance_interval_ms: 20\n"
        )
        settings = load_config(str(path))
        assert settings.history.url == "http://logo.example:3000/api/v1/history"
        assert settings.playback.advance_interval_ms == 20

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("viewer:\n  image_width: 200\n")
        monkeypatch.setenv("LOGO_REPLAY_IMAGE_WIDTH", "640")
        monkeypatch.setenv("LOGO_REPLAY_START_URL", "http://x/?play=true")
        monkeypatch.setenv("LOGO_REPLAY_REFRESH_INTERVAL_SECONDS", "60")

        settings = load_config(str(path))

        assert settings.viewer.image_width == 640
        assert settings.viewer.start_url == "http://x/?play=true"
        assert settings.playback.refresh_interval_seconds == 60.0

    def test_port_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        assert load_config(str(tmp_path / "none.yaml")).server.port == 9000

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValidationError):
            Settings.model_validate({"playback": {"advance_interval_ms": 0}})
