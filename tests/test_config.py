import logging

import pytest

from refraction_bot.config import BotConfig, Config, DiscordChannels, DiscordConfig


def test_bot_config_reads_redis_url():
    config = BotConfig.from_env({"BOT_REDIS_URL": "redis://localhost:6379"})
    assert config.redis_url == "redis://localhost:6379"


def test_bot_config_missing_redis_url_warns(caplog):
    with caplog.at_level(logging.WARNING):
        config = BotConfig.from_env({})
    assert config.redis_url is None
    assert "BOT_REDIS_URL is empty" in caplog.text


def test_channels_parse_ids():
    channels = DiscordChannels.from_env(
        {"DISCORD_LOG_CHANNEL_ID": "1234", "DISCORD_WELCOME_CHANNEL_ID": "5678"}
    )
    assert channels == DiscordChannels(1234, 5678)


@pytest.mark.parametrize("value", ["", "abc", "-5", "0", "18446744073709551616", "12 "])
def test_channels_reject_invalid_ids(value):
    channels = DiscordChannels.from_env(
        {"DISCORD_LOG_CHANNEL_ID": value, "DISCORD_WELCOME_CHANNEL_ID": value}
    )
    assert channels.log_channel_id is None
    assert channels.welcome_channel_id is None


def test_channels_missing_warns(caplog):
    with caplog.at_level(logging.WARNING):
        channels = DiscordChannels.from_env({})
    assert channels == DiscordChannels(None, None)
    assert "DISCORD_LOG_CHANNEL_ID is empty" in caplog.text
    assert "DISCORD_WELCOME_CHANNEL_ID is empty" in caplog.text


def test_full_config_from_env():
    env = {
        "BOT_REDIS_URL": "redis://localhost",
        "DISCORD_LOG_CHANNEL_ID": "42",
    }
    config = Config.from_env(env)
    assert config.bot.redis_url == "redis://localhost"
    assert config.discord.channels.log_channel_id == 42
    assert config.discord.channels.welcome_channel_id is None


def test_discord_config_wraps_channels():
    env = {"DISCORD_WELCOME_CHANNEL_ID": "77"}
    assert DiscordConfig.from_env(env).channels == DiscordChannels.from_env(env)


def test_defaults_are_empty():
    config = Config()
    assert config.bot.redis_url is None
    assert config.discord.channels == DiscordChannels()


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("BOT_REDIS_URL", "redis://localhost:1")
    assert BotConfig.from_env().redis_url == "redis://localhost:1"