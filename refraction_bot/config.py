"""Bot configuration read from the environment."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

_SNOWFLAKE = re.compile(r"\+?[0-9]+")


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


@dataclass
class BotConfig:
    """Settings for the bot itself."""

    redis_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BotConfig:
        redis_url = _environ(environ).get("BOT_REDIS_URL")
        if redis_url is not None:
            log.info("Redis URL is %s", redis_url)
        else:
            log.warning(
                "BOT_REDIS_URL is empty; features requiring storage will be disabled."
            )
        return cls(redis_url)


def _channel_from_env(environ: Mapping[str, str], var: str) -> int | None:
    value = environ.get(var)
    if value is None or not _SNOWFLAKE.fullmatch(value):
        return None
    channel_id = int(value)
    if not 0 < channel_id < 2**64:
        return None
    return channel_id


@dataclass
class DiscordChannels:
    """Channels the bot posts to."""

    log_channel_id: int | None = None
    welcome_channel_id: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DiscordChannels:
        env = _environ(environ)

        log_channel_id = _channel_from_env(env, "DISCORD_LOG_CHANNEL_ID")
        if log_channel_id is not None:
            log.info("Log channel is %s", log_channel_id)
        else:
            log.warning(
                "DISCORD_LOG_CHANNEL_ID is empty; this will disable logging in your server."
            )

        welcome_channel_id = _channel_from_env(env, "DISCORD_WELCOME_CHANNEL_ID")
        if welcome_channel_id is not None:
            log.info("Welcome channel is %s", welcome_channel_id)
        else:
            log.warning(
                "DISCORD_WELCOME_CHANNEL_ID is empty; this will disable welcome "
                "channel features in your server"
            )

        return cls(log_channel_id, welcome_channel_id)


@dataclass
class DiscordConfig:
    """Discord server settings."""

    channels: DiscordChannels = field(default_factory=DiscordChannels)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DiscordConfig:
        return cls(DiscordChannels.from_env(environ))


@dataclass
class Config:
    """The whole configuration."""

    bot: BotConfig = field(default_factory=BotConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        return cls(BotConfig.from_env(environ), DiscordConfig.from_env(environ))