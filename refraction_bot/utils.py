"""Message models, embed building and small helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

BLITZ_BLUE = 0x6FC6E2

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

_MESSAGE_LINK = re.compile(
    r"(?:https?://)?(?:canary\.|ptb\.)?discord(?:app)?\.com/channels/"
    r"(?P<server_id>\d+)/(?P<channel_id>\d+)/(?P<message_id>\d+)"
)


@dataclass
class EmbedField:
    """One name/value field of an embed."""

    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass
class Embed:
    """A rich embed as sent to Discord."""

    title: str | None = None
    description: str | None = None
    url: str | None = None
    color: int | None = None
    image: str | None = None
    timestamp: datetime | None = None
    author_name: str | None = None
    author_icon_url: str | None = None
    footer: str | None = None
    fields: list[EmbedField] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the embed in Discord's JSON shape, leaving out unset parts."""
        data: dict[str, Any] = {}
        for key in ("title", "description", "url", "color"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.image is not None:
            data["image"] = {"url": self.image}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        if self.author_name is not None:
            author = {"name": self.author_name}
            if self.author_icon_url is not None:
                author["icon_url"] = self.author_icon_url
            data["author"] = author
        if self.footer is not None:
            data["footer"] = {"text": self.footer}
        if self.fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        return data


@dataclass
class Attachment:
    """A file attached to a message."""

    filename: str
    url: str
    content_type: str | None = None


@dataclass
class Message:
    """The parts of a chat message the bot works with."""

    id: int
    content: str = ""
    attachments: list[Attachment] = field(default_factory=list)
    channel_id: int = 0
    guild_id: int | None = None
    author_id: int = 0
    author_tag: str = ""
    author_avatar_url: str | None = None
    webhook_id: int | None = None
    timestamp: datetime | None = None

    @property
    def link(self) -> str:
        """The jump link to this message."""
        guild = self.guild_id if self.guild_id is not None else "@me"
        return f"https://discord.com/channels/{guild}/{self.channel_id}/{self.id}"


@dataclass(frozen=True)
class MessageLink:
    """A link to a message found in some text."""

    url: str
    guild_id: int
    channel_id: int
    message_id: int


def semver_split(version: str) -> list[int]:
    """Split a dotted version into its numeric parts, dropping any that are not numbers."""
    parts = []
    for piece in version.split("."):
        if _UNSIGNED.fullmatch(piece):
            number = int(piece)
            if number <= _U32_MAX:
                parts.append(number)
    return parts


def find_first_image(message: Message) -> str | None:
    """Return the URL of the first image attachment, if any."""
    return next(
        (
            a.url
            for a in message.attachments
            if (a.content_type or "").startswith("image/")
        ),
        None,
    )


def find_message_links(content: str) -> list[MessageLink]:
    """Return every message link in ``content``, in order."""
    return [
        MessageLink(
            url=m.group(0),
            guild_id=int(m.group("server_id")),
            channel_id=int(m.group("channel_id")),
            message_id=int(m.group("message_id")),
        )
        for m in _MESSAGE_LINK.finditer(content)
    ]


def message_embed(message: Message, channel_name: str) -> Embed:
    """Build the embed that quotes ``message`` from the channel ``channel_name``."""
    embed = Embed(
        author_name=message.author_tag,
        author_icon_url=message.author_avatar_url,
        color=BLITZ_BLUE,
        timestamp=message.timestamp,
        footer=f"#{channel_name}",
        description=f"{message.content}\n\n[Jump to original message]({message.link})",
    )
    if message.attachments:
        embed.fields.extend(
            EmbedField("Attachments", f"[{a.filename}]({a.url})", False)
            for a in message.attachments
        )
        image = find_first_image(message)
        if image is not None:
            embed.image = image
    return embed