"""Tags: markdown snippets with YAML front matter that the bot can post."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import yaml

from .consts import parse_color
from .utils import Embed, EmbedField

TAG_DIR = "tags"

_FRONTMATTER = re.compile(
    r"\A---[ \t]*\r?\n(?P<data>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


class TagError(Exception):
    """A tag could not be parsed or found."""


@dataclass
class TagFrontmatter:
    """The YAML header of a tag."""

    title: str
    color: str | None = None
    image: str | None = None
    fields: list[EmbedField] | None = None


@dataclass
class Tag:
    """A tag: its id, body and header."""

    content: str
    id: str
    frontmatter: TagFrontmatter


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TagError(f"'{key}' must be a string")
    return value


def _parse_fields(raw: object) -> list[EmbedField] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise TagError("'fields' must be a list")
    fields = []
    for item in raw:
        if not isinstance(item, dict):
            raise TagError("each field must be a mapping")
        name, value = item.get("name"), item.get("value")
        inline = item.get("inline", False)
        if not isinstance(name, str) or not isinstance(value, str):
            raise TagError("each field needs a string 'name' and 'value'")
        if not isinstance(inline, bool):
            raise TagError("'inline' must be a boolean")
        fields.append(EmbedField(name, value, inline))
    return fields


def _parse_frontmatter(data: object) -> TagFrontmatter:
    if not isinstance(data, dict):
        raise TagError("front matter must be a mapping")
    title = data.get("title")
    if not isinstance(title, str):
        raise TagError("missing string field 'title'")
    return TagFrontmatter(
        title=title,
        color=_optional_str(data, "color"),
        image=_optional_str(data, "image"),
        fields=_parse_fields(data.get("fields")),
    )


def _tag_id(file_name: str) -> str:
    while file_name.endswith(".md"):
        file_name = file_name[: -len(".md")]
    return file_name


def parse_tag(file_name: str, text: str) -> Tag:
    """Parse the tag stored in ``text`` under the file name ``file_name``."""
    match = _FRONTMATTER.match(text)
    content = text[match.end():] if match else text
    try:
        if match is None:
            raise TagError("no front matter found")
        try:
            data = yaml.safe_load(match.group("data"))
        except yaml.YAMLError as exc:
            raise TagError(str(exc)) from exc
        frontmatter = _parse_frontmatter(data)
    except TagError as exc:
        raise TagError(
            f"Failed to parse file {file_name}! Here's what it looked like:\n"
            f"{content}\n\nReported Error:\n{exc}\n"
        ) from exc
    return Tag(content=content, id=_tag_id(file_name), frontmatter=frontmatter)


def load_tags(directory: str | Path = TAG_DIR) -> list[Tag]:
    """Load every file in ``directory`` as a tag, sorted by id."""
    tags = [
        parse_tag(path.name, path.read_text(encoding="utf-8"))
        for path in Path(directory).iterdir()
    ]
    tags.sort(key=lambda t: t.id)
    return tags


def find_tag(tags: Iterable[Tag], tag_id: str) -> Tag:
    """Return the tag called ``tag_id``; raise TagError if there is none."""
    for tag in tags:
        if tag.id == tag_id:
            return tag
    raise TagError(f"Tried to get non-existent tag: {tag_id}")


def tag_help(tags: Sequence[Tag]) -> str:
    """Return the help text listing the available tags."""
    tag_list = ", ".join(f"`{tag.id}`" for tag in tags)
    return f"Available tags: {tag_list}"


def tag_embed(tag: Tag) -> Embed:
    """Build the embed that shows ``tag``."""
    frontmatter = tag.frontmatter
    embed = Embed(title=frontmatter.title, description=tag.content)
    if frontmatter.color is not None:
        try:
            embed.color = parse_color(frontmatter.color).value
        except ValueError:
            embed.color = 0
    if frontmatter.image is not None:
        embed.image = frontmatter.image
    if frontmatter.fields is not None:
        embed.fields.extend(
            EmbedField(f.name, f.value, f.inline) for f in frontmatter.fields
        )
    return embed


def tag_mention(user_id: int) -> str:
    """Return the message content that pings ``user_id`` with a tag."""
    return f"<@{user_id}>"