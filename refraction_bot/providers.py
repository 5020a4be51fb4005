"""Finding and downloading launcher logs linked or attached to a message."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

from .api import ApiError, HttpClient, get_raw_paste_file, paste_files
from .utils import Message

log = logging.getLogger(__name__)

HASTE = "https://hst.sh"
MCLOGS = "https://api.mclo.gs/1"
PASTEBIN = "https://pastebin.com"
RAW = "/raw"


def _first_capture(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


class LogProvider(ABC):
    """A place a log can come from: finds a reference to it and downloads it."""

    @abstractmethod
    def find_match(self, message: Message) -> str | None:
        """Return what identifies a log of this kind in ``message``, if any."""

    @abstractmethod
    async def fetch(self, http: HttpClient, content: str) -> str:
        """Download the log identified by ``content``."""


class ZeroXZeroProvider(LogProvider):
    """Logs uploaded to 0x0.st."""

    _pattern = re.compile(r"https://0x0\.st/\w*.\w*")

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s is a 0x0 paste", message.id)
        match = self._pattern.search(message.content)
        return match.group(0) if match else None

    async def fetch(self, http: HttpClient, content: str) -> str:
        response = await http.get_request(content)
        return response.text


class AttachmentProvider(LogProvider):
    """Logs attached to the message as text files."""

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s has text attachments", message.id)
        return next(
            (
                a.url
                for a in message.attachments
                if a.content_type is not None and a.content_type.startswith("text/")
            ),
            None,
        )

    async def fetch(self, http: HttpClient, content: str) -> str:
        response = await http.get_request(content)
        return response.content.decode("utf-8")


class HasteProvider(LogProvider):
    """Logs pasted to hst.sh."""

    _pattern = re.compile(r"https://hst\.sh(?:/raw)?/(\w+(?:\.\w*)?)")

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s is a hst.sh paste", message.id)
        return _first_capture(self._pattern, message.content)

    async def fetch(self, http: HttpClient, content: str) -> str:
        response = await http.get_request(f"{HASTE}{RAW}/{content}")
        return response.text


class MCLogsProvider(LogProvider):
    """Logs pasted to mclo.gs."""

    _pattern = re.compile(r"https://mclo\.gs/(\w+)")

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s is an mclo.gs paste", message.id)
        return _first_capture(self._pattern, message.content)

    async def fetch(self, http: HttpClient, content: str) -> str:
        response = await http.get_request(f"{MCLOGS}{RAW}/{content}")
        return response.text


class PasteGGProvider(LogProvider):
    """Logs pasted to paste.gg; the first file of the paste is used."""

    _pattern = re.compile(r"https://paste.gg/p/\w+/(\w+)")

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s is a paste.gg paste", message.id)
        return _first_capture(self._pattern, message.content)

    async def fetch(self, http: HttpClient, content: str) -> str:
        files = await paste_files(http, content)
        if files.result is None:
            raise ApiError("Got an empty result from paste.gg!")
        if not files.result:
            raise ApiError("Couldn't get file id from empty paste.gg response!")
        return await get_raw_paste_file(http, content, files.result[0].id)


class PasteBinProvider(LogProvider):
    """Logs pasted to pastebin.com."""

    _pattern = re.compile(r"https://pastebin\.com(?:/raw)?/(\w+)")

    def find_match(self, message: Message) -> str | None:
        log.debug("Checking if message %s is a pastebin paste", message.id)
        return _first_capture(self._pattern, message.content)

    async def fetch(self, http: HttpClient, content: str) -> str:
        response = await http.get_request(f"{PASTEBIN}{RAW}/{content}")
        return response.text


PROVIDERS: tuple[LogProvider, ...] = (
    ZeroXZeroProvider(),
    AttachmentProvider(),
    HasteProvider(),
    MCLogsProvider(),
    PasteBinProvider(),
    PasteGGProvider(),
)


async def find_log(http: HttpClient, message: Message) -> str | None:
    """Download the log from the first provider that recognises ``message``."""
    for provider in PROVIDERS:
        found = provider.find_match(message)
        if found is not None:
            return await provider.fetch(http, found)
    return None