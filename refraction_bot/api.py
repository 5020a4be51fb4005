"""Clients for the web services the bot talks to."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import httpx

log = logging.getLogger(__name__)

DADJOKE = "https://icanhazdadjoke.com"
GITHUB_API = "https://api.github.com"
PRISM_REPO = "/repos/PrismLauncher/PrismLauncher"
PASTE_GG = "https://api.paste.gg/v1"
PASTES = "/pastes"
PLURAL_KIT = "https://api.pluralkit.me/v2"
MESSAGES = "/messages"
META = "https://meta.prismlauncher.org/v1"
MINECRAFT_PACKAGEJSON = "/net.minecraft/package.json"
RORY = "https://rory.cat"
PURR = "/purr"

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class ApiError(Exception):
    """A service answered, but not with what was expected."""


def user_agent() -> str:
    """Return the User-Agent the bot sends with every request."""
    try:
        package_version = version("refraction_bot")
    except PackageNotFoundError:
        package_version = "development"
    return f"refraction/{package_version}"


class HttpClient:
    """A thin asynchronous HTTP client carrying the bot's User-Agent."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        if client is None:
            client = httpx.AsyncClient(headers={"User-Agent": user_agent()})
        self.client = client

    async def get_request(
        self, url: str, headers: dict[str, str] | None = None
    ) -> httpx.Response:
        """GET ``url``; raise httpx.HTTPStatusError on an error status."""
        log.debug("Making request to %s", url)
        response = await self.client.get(url, headers=headers)
        response.raise_for_status()
        return response

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self.client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError as exc:
        raise ApiError(f"Invalid JSON from {response.request.url}") from exc


def _require(data: Any, key: str, kind: type | tuple[type, ...], what: str) -> Any:
    if not isinstance(data, dict) or not isinstance(data.get(key), kind):
        raise ApiError(f"Malformed {what} response: bad or missing '{key}'")
    return data[key]


def _optional(data: dict, key: str, kind: type, what: str) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise ApiError(f"Malformed {what} response: bad '{key}'")
    return value


async def get_joke(http: HttpClient) -> str:
    """Fetch a dad joke as plain text."""
    response = await http.client.get(DADJOKE, headers={"Accept": "text/plain"})
    return response.text


_GITHUB_HEADERS = {"Accept": "application/vnd.github+json"}


async def get_latest_prism_version(http: HttpClient) -> str:
    """Return the tag name of the latest Prism Launcher release."""
    log.debug("Fetching the latest version of Prism Launcher")
    response = await http.get_request(
        f"{GITHUB_API}{PRISM_REPO}/releases/latest", headers=_GITHUB_HEADERS
    )
    return _require(_json(response), "tag_name", str, "GitHub release")


async def get_prism_stargazers_count(http: HttpClient) -> int:
    """Return how many stars the Prism Launcher repository has."""
    log.debug("Fetching Prism Launcher's stargazer count")
    try:
        response = await http.get_request(
            f"{GITHUB_API}{PRISM_REPO}", headers=_GITHUB_HEADERS
        )
        data = _json(response)
    except (httpx.HTTPError, ApiError) as exc:
        raise ApiError("Couldn't fetch PrismLauncher/PrismLauncher!") from exc
    count = data.get("stargazers_count") if isinstance(data, dict) else None
    if not isinstance(count, int) or isinstance(count, bool):
        raise ApiError("Couldn't retrieve stargazers_count from GitHub!")
    return count


class PasteStatus(Enum):
    """The status field of a paste.gg response."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class PasteFile:
    """One file of a paste."""

    id: str
    name: str | None = None


@dataclass
class PasteResponse:
    """A paste.gg files listing."""

    status: PasteStatus
    result: list[PasteFile] | None = None
    error: str | None = None
    message: str | None = None


def _parse_paste_response(data: Any) -> PasteResponse:
    what = "paste.gg"
    raw_status = _require(data, "status", str, what)
    try:
        status = PasteStatus(raw_status)
    except ValueError as exc:
        raise ApiError(f"Unknown paste.gg status {raw_status!r}") from exc
    raw_result = _optional(data, "result", list, what)
    result = None
    if raw_result is not None:
        result = [
            PasteFile(
                id=_require(item, "id", str, what),
                name=_optional(item, "name", str, what),
            )
            for item in raw_result
        ]
    return PasteResponse(
        status=status,
        result=result,
        error=_optional(data, "error", str, what),
        message=_optional(data, "message", str, what),
    )


async def paste_files(http: HttpClient, paste_id: str) -> PasteResponse:
    """List the files of a paste; raise ApiError if paste.gg reports an error."""
    response = await http.get_request(f"{PASTE_GG}{PASTES}/{paste_id}/files")
    parsed = _parse_paste_response(_json(response))
    if parsed.status is PasteStatus.ERROR:
        if parsed.error is None:
            raise ApiError("Paste.gg gave us an error but with no message!")
        raise ApiError(parsed.error)
    return parsed


async def get_raw_paste_file(http: HttpClient, paste_id: str, file_id: str) -> str:
    """Return the raw text of one file of a paste."""
    response = await http.get_request(
        f"{PASTE_GG}{PASTES}/{paste_id}/files/{file_id}/raw"
    )
    return response.text


async def pluralkit_sender(http: HttpClient, message_id: int) -> int:
    """Return the id of the account that sent a message through PluralKit."""
    response = await http.get_request(f"{PLURAL_KIT}{MESSAGES}/{message_id}")
    data = _json(response)
    sender = _require(data, "sender", str, "PluralKit")
    if _UNSIGNED.fullmatch(sender) and 0 < int(sender) <= _U64_MAX:
        return int(sender)
    raise ApiError(
        "Couldn't parse response from PluralKit as a UserId! "
        f"Here's the response:\n{data!r}"
    )


async def latest_minecraft_version(http: HttpClient) -> str:
    """Return the recommended Minecraft version from Prism's metadata."""
    response = await http.get_request(f"{META}{MINECRAFT_PACKAGEJSON}")
    data = _json(response)
    what = "Minecraft package"
    _require(data, "formatVersion", int, what)
    _require(data, "name", str, what)
    _require(data, "uid", str, what)
    recommended = _require(data, "recommended", list, what)
    if not recommended:
        raise ApiError("Couldn't find latest version of Minecraft!")
    first = recommended[0]
    if not isinstance(first, str):
        raise ApiError(f"Malformed {what} response: bad 'recommended'")
    return first


@dataclass
class RoryResponse:
    """A picture of Rory, or an error."""

    id: int
    url: str
    error: str | None = None


async def get_rory(http: HttpClient, rory_id: int | None = None) -> RoryResponse:
    """Fetch the Rory picture ``rory_id``, or a random one."""
    target = "" if rory_id is None else str(rory_id)
    response = await http.get_request(f"{RORY}{PURR}/{target}")
    try:
        data = _json(response)
        return RoryResponse(
            id=_require(data, "id", int, "rory"),
            url=_require(data, "url", str, "rory"),
            error=_optional(data, "error", str, "rory"),
        )
    except ApiError as exc:
        raise ApiError("Couldn't parse the rory response!") from exc