"""Welcome channel layouts: parsing and turning them into messages."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from .utils import Embed

_HEX = re.compile(r"[+-]?[0-9A-Fa-f]+")
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_U64_MAX = 2**64 - 1


class LayoutError(ValueError):
    """A welcome layout is malformed."""


@dataclass
class Button:
    """A button that toggles a role."""

    custom_id: str
    label: str
    emoji: str | None = None


@dataclass
class OutgoingMessage:
    """A message to post: text, embeds and one row of buttons."""

    content: str | None = None
    embeds: list[Embed] = field(default_factory=list)
    buttons: list[Button] = field(default_factory=list)


def _parse_hex(color: str) -> int:
    if not _HEX.fullmatch(color):
        raise LayoutError(f"invalid hex colour {color!r}")
    value = int(color, 16)
    if not _I32_MIN <= value <= _I32_MAX:
        raise LayoutError(f"hex colour out of range: {color!r}")
    return value & 0xFFFFFFFF


@dataclass
class WelcomeEmbed:
    """An embed in the welcome channel."""

    title: str
    description: str | None = None
    url: str | None = None
    hex_color: str | None = None
    image: str | None = None

    def to_message(self) -> OutgoingMessage:
        embed = Embed(
            title=self.title, description=self.description, url=self.url, image=self.image
        )
        if self.hex_color is not None:
            embed.color = _parse_hex(self.hex_color)
        return OutgoingMessage(embeds=[embed])


@dataclass
class WelcomeRole:
    """A role that members can give themselves."""

    title: str
    id: int
    emoji: str | None = None

    def to_button(self) -> Button:
        return Button(custom_id=str(self.id), label=self.title, emoji=self.emoji)


@dataclass
class WelcomeRoleCategory:
    """A group of self-assignable roles posted as one message."""

    title: str
    description: str | None = None
    roles: list[WelcomeRole] = field(default_factory=list)

    def to_message(self) -> OutgoingMessage:
        content = f"**{self.title}**"
        if self.description is not None:
            content += f"\n{self.description}"
        return OutgoingMessage(
            content=content, buttons=[role.to_button() for role in self.roles]
        )


def _object(data: Any, what: str, allowed: set[str]) -> dict:
    if not isinstance(data, dict):
        raise LayoutError(f"{what} must be an object")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise LayoutError(f"unknown field {unknown[0]!r} in {what}")
    return data


def _value(data: dict, key: str, kind: type, what: str, *, required: bool) -> Any:
    value = data.get(key)
    if value is None:
        if required:
            raise LayoutError(f"missing field {key!r} in {what}")
        return None
    if not isinstance(value, kind) or isinstance(value, bool):
        raise LayoutError(f"field {key!r} in {what} has the wrong type")
    return value


def _embed_from_dict(data: Any) -> WelcomeEmbed:
    what = "embed"
    obj = _object(data, what, {"title", "description", "url", "hex_color", "image"})
    return WelcomeEmbed(
        title=_value(obj, "title", str, what, required=True),
        description=_value(obj, "description", str, what, required=False),
        url=_value(obj, "url", str, what, required=False),
        hex_color=_value(obj, "hex_color", str, what, required=False),
        image=_value(obj, "image", str, what, required=False),
    )


def _role_from_dict(data: Any) -> WelcomeRole:
    what = "role"
    obj = _object(data, what, {"title", "id", "emoji"})
    role_id = _value(obj, "id", int, what, required=True)
    if not 0 <= role_id <= _U64_MAX:
        raise LayoutError(f"role id out of range: {role_id}")
    return WelcomeRole(
        title=_value(obj, "title", str, what, required=True),
        id=role_id,
        emoji=_value(obj, "emoji", str, what, required=False),
    )


def _category_from_dict(data: Any) -> WelcomeRoleCategory:
    what = "role category"
    obj = _object(data, what, {"title", "description", "roles"})
    return WelcomeRoleCategory(
        title=_value(obj, "title", str, what, required=True),
        description=_value(obj, "description", str, what, required=False),
        roles=[_role_from_dict(r) for r in _value(obj, "roles", list, what, required=True)],
    )


@dataclass
class WelcomeLayout:
    """Everything posted to the welcome channel."""

    embeds: list[WelcomeEmbed] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    roles: list[WelcomeRoleCategory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> WelcomeLayout:
        """Build a layout from decoded JSON; unknown fields are rejected."""
        what = "layout"
        obj = _object(data, what, {"embeds", "messages", "roles"})
        messages = _value(obj, "messages", list, what, required=True)
        if not all(isinstance(m, str) for m in messages):
            raise LayoutError("every entry of 'messages' must be a string")
        return cls(
            embeds=[_embed_from_dict(e) for e in _value(obj, "embeds", list, what, required=True)],
            messages=list(messages),
            roles=[_category_from_dict(c) for c in _value(obj, "roles", list, what, required=True)],
        )

    def outgoing_messages(self) -> list[OutgoingMessage]:
        """Return the messages to post, in order: embeds, plain messages, roles."""
        return [
            *(e.to_message() for e in self.embeds),
            *(OutgoingMessage(content=m) for m in self.messages),
            *(c.to_message() for c in self.roles),
        ]


def parse_layout(text: str) -> WelcomeLayout:
    """Parse a welcome layout from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LayoutError(f"invalid JSON: {exc}") from exc
    return WelcomeLayout.from_dict(data)


def is_json_content_type(content_type: str) -> bool:
    """Return whether an attachment's content type marks it as JSON."""
    return content_type.startswith("application/json;")