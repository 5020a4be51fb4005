from datetime import datetime, timezone

import pytest

from refraction_bot.utils import (
    BLITZ_BLUE,
    Attachment,
    Embed,
    EmbedField,
    Message,
    MessageLink,
    find_first_image,
    find_message_links,
    message_embed,
    semver_split,
)


@pytest.mark.parametrize(
    "version, expected",
    [
        ("8.0", [8, 0]),
        ("9.2.1", [9, 2, 1]),
        ("1.x.3", [1, 3]),
        ("-1.2", [2]),
        ("", []),
        ("4294967296.7", [7]),
        ("+5.6", [5, 6]),
        (" 5.6", [6]),
    ],
)
def test_semver_split(version, expected):
    assert semver_split(version) == expected


def _attachments():
    return [
        Attachment("log.txt", "https://cdn.example.com/log.txt", "text/plain"),
        Attachment("raw.bin", "https://cdn.example.com/raw.bin", None),
        Attachment("pic.png", "https://cdn.example.com/pic.png", "image/png"),
        Attachment("other.jpg", "https://cdn.example.com/other.jpg", "image/jpeg"),
    ]


def test_find_first_image_picks_first_image():
    message = Message(id=1, attachments=_attachments())
    assert find_first_image(message) == "https://cdn.example.com/pic.png"


def test_find_first_image_none_without_images():
    message = Message(id=1, attachments=_attachments()[:2])
    assert find_first_image(message) is None


def test_find_message_links_variants():
    content = (
        "look https://discord.com/channels/10/20/30 and "
        "canary.discordapp.com/channels/11/21/31 also "
        "http://ptb.discord.com/channels/12/22/32"
    )
    links = find_message_links(content)
    assert [(l.guild_id, l.channel_id, l.message_id) for l in links] == [
        (10, 20, 30),
        (11, 21, 31),
        (12, 22, 32),
    ]
    assert links[0] == MessageLink("https://discord.com/channels/10/20/30", 10, 20, 30)
    assert links[1].url == "canary.discordapp.com/channels/11/21/31"


def test_find_message_links_ignores_other_text():
    assert find_message_links("https://example.com/channels/1/2/3 nothing") == []


def test_link_round_trips_through_finder():
    message = Message(id=3, channel_id=2, guild_id=1)
    (link,) = find_message_links(message.link)
    assert (link.guild_id, link.channel_id, link.message_id) == (1, 2, 3)
    assert message.link == "https://discord.com/channels/1/2/3"


def test_message_embed():
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    message = Message(
        id=3,
        content="hello",
        channel_id=2,
        guild_id=1,
        author_tag="someone",
        author_avatar_url="https://cdn.example.com/avatar.png",
        timestamp=stamp,
        attachments=_attachments(),
    )
    embed = message_embed(message, "general")
    assert embed.description == f"hello\n\n[Jump to original message]({message.link})"
    assert embed.footer == "#general"
    assert embed.color == BLITZ_BLUE
    assert embed.timestamp == stamp
    assert embed.author_name == "someone"
    assert embed.author_icon_url == "https://cdn.example.com/avatar.png"
    assert embed.image == "https://cdn.example.com/pic.png"
    assert [f.value for f in embed.fields] == [
        f"[{a.filename}]({a.url})" for a in message.attachments
    ]
    assert all(f.name == "Attachments" and not f.inline for f in embed.fields)


def test_message_embed_without_attachments():
    embed = message_embed(Message(id=3, content="hi", channel_id=2, guild_id=1), "x")
    assert embed.fields == []
    assert embed.image is None


def test_embed_to_dict_shape():
    embed = Embed(
        title="t",
        image="https://cdn.example.com/i.png",
        footer="f",
        author_name="a",
        fields=[EmbedField("n", "v", True)],
    )
    data = embed.to_dict()
    assert data["image"] == {"url": "https://cdn.example.com/i.png"}
    assert data["footer"] == {"text": "f"}
    assert data["author"] == {"name": "a"}
    assert data["fields"] == [{"name": "n", "value": "v", "inline": True}]
    assert "description" not in data