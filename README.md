# refraction_bot

Building blocks for a support bot in a game-launcher community chat. The
package holds the parts of the bot that do real work, independent of any chat
gateway:

- **Log analysis**: find a log in a message (a 0x0.st, hst.sh, mclo.gs,
  paste.gg or pastebin link, or a `text/` attachment), download it, and scan
  it for known problems such as out-of-memory crashes, wrong Java versions,
  bad JVM arguments or an outdated launcher.
- **Tags**: canned answers kept as Markdown files with YAML front matter,
  turned into embeds.
- **Welcome layouts**: a JSON description of a welcome channel (embeds, plain
  messages and role-button categories), checked strictly and turned into
  outgoing messages.
- **API helpers**: small async functions for a dad-joke service, the
  launcher's latest release and star count on GitHub, paste.gg, PluralKit,
  the launcher's metadata server and a cat-picture service.
- **Storage**: an optional Redis cache for PluralKit users, the latest
  launcher version and the star count.
- **"ETA" replies**: detect the word "eta" in a message and pick an answer.

## Modules

| Module | What it offers |
| --- | --- |
| `refraction_bot.consts` | `Colors`, `parse_color`, `default_color` |
| `refraction_bot.utils` | `semver_split`, `find_message_links`, `find_first_image`, `message_embed`, and the `Message`, `Attachment`, `Embed`, `EmbedField`, `MessageLink` types |
| `refraction_bot.config` | `Config`, `BotConfig`, `DiscordConfig`, `DiscordChannels`, each with `from_env` |
| `refraction_bot.tags` | `Tag`, `TagFrontmatter`, `TagError`, `parse_tag`, `load_tags`, `find_tag`, `tag_help`, `tag_embed`, `tag_mention` |
| `refraction_bot.api` | `HttpClient`, `ApiError`, `user_agent`, and the async request functions `get_joke`, `get_latest_prism_version`, `get_prism_stargazers_count`, `paste_files`, `get_raw_paste_file`, `pluralkit_sender`, `latest_minecraft_version`, `get_rory` |
| `refraction_bot.storage` | `Storage` |
| `refraction_bot.launcher` | `launcher_version`, `stargazer_count`, `stars_embed` |
| `refraction_bot.eta` | `mentions_eta`, `eta_response` |
| `refraction_bot.issues` | `Issue`, `find_static_issues`, `outdated_launcher`, `find_issues` |
| `refraction_bot.providers` | `LogProvider` and its subclasses, `PROVIDERS`, `find_log` |
| `refraction_bot.analyze` | `analyze_log`, `analyze_message`, `analysis_embed`, `failure_embed` |
| `refraction_bot.welcome` | `parse_layout`, `is_json_content_type`, `WelcomeLayout`, `WelcomeEmbed`, `WelcomeRole`, `WelcomeRoleCategory`, `OutgoingMessage`, `Button`, `LayoutError` |

## Configuration

`Config.from_env` reads these variables (or any mapping passed as
`environ`):

- `BOT_REDIS_URL`: Redis URL for the cache; without it, features that need
  storage are meant to be turned off.
- `DISCORD_LOG_CHANNEL_ID`: channel that receives moderation logs.
- `DISCORD_WELCOME_CHANNEL_ID`: channel that welcome layouts are posted to.

Channel ids that are not positive integers are treated as unset.

## Examples

Scanning a log you already have:

```python
from refraction_bot.issues import find_issues

with open("latest.log", encoding="utf-8") as fh:
    log = fh.read()

for issue in find_issues(log, latest_version="8.4"):
    print(issue.title)
    print(issue.description)
```

Without `latest_version`, `find_issues` skips the outdated-launcher check.
`refraction_bot.launcher.launcher_version` fetches the latest version from
GitHub, using a `Storage` cache when one is given.

Splitting a version string:

```python
from refraction_bot.utils import semver_split

semver_split("8.4")  # [8, 4]
```

Checking a welcome layout before posting it:

```python
from refraction_bot.welcome import parse_layout

with open("welcome.json", encoding="utf-8") as fh:
    layout = parse_layout(fh.read())

for message in layout.outgoing_messages():
    print(message)
```

Analysing the log in a message:

```python
import asyncio

from refraction_bot.analyze import analyze_message
from refraction_bot.api import HttpClient
from refraction_bot.utils import Message


async def main():
    async with HttpClient() as http:
        message = Message(id=1, content="see https://mclo.gs/abc123")
        embed = await analyze_message(http, message)
        if embed is not None:
            print(embed.to_dict())


asyncio.run(main())
```

`analyze_message` returns `None` when the message holds no log, and the
"Analysis failed!" embed when the log could not be downloaded.

## What this package does not do

It does not connect to a chat service. There is no gateway client, no
command registration, no event dispatch and no program to run: the
functions here build embeds and messages as plain data (`Embed.to_dict()`
gives the JSON shape) and leave sending them, and reacting to chat events,
to the code that uses the package.

## Tests

The test suite uses pytest, pytest-asyncio and respx, listed under the
`test` extra.