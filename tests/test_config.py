"""Tests for configuration loading."""

from taskroutine.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.conf") == Config()

    def test_defaults(self):
        config = Config()
        assert config.notify_channel == "console"
        assert config.notify_sound is True
        assert config.misfire_grace_seconds == 60

    def test_parses_values(self, tmp_path):
        conf = tmp_path / "taskroutine.conf"
        conf.write_text(
            "\n".join(
                [
                    "# taskroutine settings",
                    "",
                    'DATA_DIR="~/tasks data"  # quoted with comment',
                    "NOTIFY_CHANNEL=Telegram",
                    "NOTIFY_SOUND=no",
                    "MISFIRE_GRACE_SECONDS=120",
                    "TELEGRAM_BOT_TOKEN='abc:123'",
                    "TELEGRAM_CHAT_ID=42 # me",
                    "not a setting",
                    "UNKNOWN_KEY=ignored",
                ]
            )
        )
        config = load_config(conf)
        assert config.data_dir == "~/tasks data"
        assert config.notify_channel == "telegram"
        assert config.notify_sound is False
        assert config.misfire_grace_seconds == 120
        assert config.telegram_bot_token == "abc:123"
        assert config.telegram_chat_id == "42"

    def test_invalid_values_keep_defaults(self, tmp_path):
        conf = tmp_path / "taskroutine.conf"
        conf.write_text("NOTIFY_CHANNEL=pigeon\nMISFIRE_GRACE_SECONDS=soon\n")
        config = load_config(conf)
        assert config.notify_channel == "console"
        assert config.misfire_grace_seconds == 60
