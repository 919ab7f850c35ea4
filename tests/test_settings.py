"""Tests for settings validation and the persistent settings store."""

import json

import pytest

from word_audio.config.settings import AppSettings, SyncSettings, validate_word_pattern
from word_audio.config.store import SettingsStore
from word_audio.core.constants import AudioConstants, MatchConstants
from word_audio.exceptions import ConfigurationError


class TestSyncSettings:
    """Test SyncSettings defaults and validators"""

    def test_defaults(self):
        """Test out-of-the-box values"""
        settings = SyncSettings()

        assert settings.cache_dir == ".plugins-data/auto-word-audio"
        assert settings.online_template == AudioConstants.DEFAULT_ONLINE_TEMPLATE
        assert settings.prefer_local is False
        assert settings.word_pattern == MatchConstants.DEFAULT_WORD_PATTERN
        assert settings.periodic_sync_enabled is False
        assert settings.sync_interval_minutes == 30
        assert settings.max_downloads_per_run == 30
        assert settings.target_folder == ""

    def test_env_overrides(self, monkeypatch):
        """Test environment variables with the WORD_AUDIO_ prefix"""
        monkeypatch.setenv("WORD_AUDIO_PREFER_LOCAL", "true")
        monkeypatch.setenv("WORD_AUDIO_MAX_DOWNLOADS_PER_RUN", "50")

        settings = SyncSettings()

        assert settings.prefer_local is True
        assert settings.max_downloads_per_run == 50

    def test_paths_are_normalized(self):
        """Test paths are normalized"""
        settings = SyncSettings(
            cache_dir=" audio/cache/ ", target_folder="/Vocab/Day1/", audio_extension=".ogg"
        )
        assert settings.cache_dir == "audio/cache"
        assert settings.target_folder == "Vocab/Day1"
        assert settings.audio_extension == "ogg"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("sync_interval_minutes", 4),
            ("sync_interval_minutes", 181),
            ("max_downloads_per_run", 4),
            ("max_downloads_per_run", 201),
            ("online_template", "https://example.com/audio"),
            ("online_template", "ftp://example.com/{{word}}"),
            ("word_pattern", "^\\[\\[.*\\]\\]"),
            ("word_pattern", "(a)(b)"),
            ("word_pattern", "([unclosed"),
            ("cache_dir", "  "),
            ("download_delay", -1),
            ("request_timeout", 0),
        ],
    )
    def test_invalid_values_are_rejected(self, field, value):
        """Test invalid values are rejected"""
        with pytest.raises(ValueError):
            SyncSettings(**{field: value})

    def test_range_bounds_are_inclusive(self):
        """Test range bounds are inclusive"""
        settings = SyncSettings(sync_interval_minutes=5, max_downloads_per_run=200)
        assert settings.sync_interval_minutes == 5
        assert settings.max_downloads_per_run == 200

    def test_validate_word_pattern_compiles_multiline(self):
        """Test word patterns are compiled in multiline mode"""
        compiled = validate_word_pattern(r"^@(\w+)")
        assert compiled.findall("@one\n@two") == ["one", "two"]

    def test_app_settings_defaults(self):
        """Test app settings defaults"""
        app = AppSettings()
        assert app.logging.level == "INFO"
        assert str(app.settings_file) == ".word-audio.json"


class TestSettingsStore:
    """Test class for SettingsStore"""

    def test_in_memory_store(self):
        """Test a store without a backing file"""
        store = SettingsStore()
        assert store.current() == SyncSettings()
        store.update(prefer_local=True)
        assert store.current().prefer_local is True

    def test_update_persists_json(self, tmp_path):
        """Test that updates are written and reloaded"""
        path = tmp_path / "settings.json"
        store = SettingsStore(path)

        store.update(prefer_local="true", sync_interval_minutes="45")

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["prefer_local"] is True
        assert saved["sync_interval_minutes"] == 45

        reloaded = SettingsStore(path).current()
        assert reloaded.prefer_local is True
        assert reloaded.sync_interval_minutes == 45

    def test_saved_values_are_layered_over_defaults(self, tmp_path):
        """Test saved values are layered over defaults"""
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"cache_dir": "audio", "legacy_key": 1}), encoding="utf-8")

        settings = SettingsStore(path).current()

        assert settings.cache_dir == "audio"
        assert settings.max_downloads_per_run == 30

    def test_invalid_update_keeps_previous_settings(self, tmp_path):
        """Test invalid update keeps previous settings"""
        path = tmp_path / "settings.json"
        store = SettingsStore(path)
        store.update(sync_interval_minutes=60)

        with pytest.raises(ConfigurationError) as exc_info:
            store.update(sync_interval_minutes=500)

        assert "between 5 and 180" in exc_info.value.reason
        assert store.current().sync_interval_minutes == 60
        assert json.loads(path.read_text(encoding="utf-8"))["sync_interval_minutes"] == 60

    def test_unknown_setting_is_rejected(self):
        """Test unknown setting is rejected"""
        store = SettingsStore()
        with pytest.raises(ConfigurationError) as exc_info:
            store.update(colour="blue")
        assert exc_info.value.setting == "colour"

    def test_corrupt_file_raises_configuration_error(self, tmp_path):
        """Test corrupt file raises configuration error"""
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SettingsStore(path)

    def test_non_object_file_is_rejected(self, tmp_path):
        """Test a settings file that is not a JSON object"""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SettingsStore(path)

    def test_listeners_receive_new_settings(self):
        """Test listeners receive new settings"""
        store = SettingsStore()
        seen: list[SyncSettings] = []
        store.subscribe(seen.append)

        store.update(periodic_sync_enabled=True)

        assert len(seen) == 1
        assert seen[0].periodic_sync_enabled is True

    def test_listeners_not_called_on_invalid_update(self):
        """Test listeners not called on invalid update"""
        store = SettingsStore()
        seen: list[SyncSettings] = []
        store.subscribe(seen.append)

        with pytest.raises(ConfigurationError):
            store.update(max_downloads_per_run=1)
        assert seen == []
