"""Known problems that can be recognised in a launcher log."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .utils import semver_split

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Issue:
    """A problem found in a log, with advice on fixing it."""

    title: str
    description: str


_CLASS_NOT_FOUND = "Caused by: java.lang.ClassNotFoundException: "

_VM_OPTION = re.compile(r"Unrecognized VM option '(.+)'[\r\n]")
_UNRECOGNIZED_OPTION = re.compile(r"Unrecognized option: (.+)[\r\n]")
_SWITCH_VERSION = re.compile(
    r"Please switch to one of the following Java versions for this instance:[\r\n]+"
    r"(Java version [\d.]+)",
    re.MULTILINE,
)
_LAUNCHER_VERSION = re.compile(
    r"Prism Launcher version: ((?:([0-9]+)\.)?([0-9]+)\.([0-9]+))"
)


@dataclass(frozen=True)
class _TextCheck:
    """An issue reported whenever any of its markers appears in the log."""

    markers: tuple[str, ...]
    issue: Issue

    def __call__(self, text: str) -> Issue | None:
        if any(marker in text for marker in self.markers):
            return self.issue
        return None


_fabric_internal = _TextCheck(
    (
        f"{_CLASS_NOT_FOUND}net.fabricmc.fabric.impl",
        f"{_CLASS_NOT_FOUND}net.fabricmc.fabric.mixin",
        f"{_CLASS_NOT_FOUND}net.fabricmc.fabric.loader.impl",
        f"{_CLASS_NOT_FOUND}net.fabricmc.fabric.loader.mixin",
        "org.quiltmc.loader.impl.FormattedException: java.lang.NoSuchMethodError:",
    ),
    Issue(
        "Fabric Internal Access",
        "The mod you are using is using fabric internals that are not meant "
        "to be used by anything but the loader itself.\n"
        "        Those mods break both on Quilt and with fabric updates.\n"
        "        If you're using fabric, downgrade your fabric loader could work, "
        "on Quilt you can try updating to the latest beta version, "
        "but there's nothing much to do unless the mod author stops using them.",
    ),
)

_flatpak_nvidia = _TextCheck(
    (
        "org.lwjgl.LWJGLException: Could not choose GLX13 config",
        "GLFW error 65545: GLX: Failed to find a suitable GLXFBConfig",
    ),
    Issue(
        "Outdated Nvidia Flatpak Driver",
        "The Nvidia driver for flatpak is outdated.\n"
        "        Please run `flatpak update` to fix this issue. "
        "If that does not solve it, "
        "please wait until the driver is added to Flathub and run it again.",
    ),
)

_forge_java = _TextCheck(
    (
        "java.lang.NoSuchMethodError: sun.security.util.ManifestEntryVerifier."
        "<init>(Ljava/util/jar/Manifest;)V",
    ),
    Issue(
        "Forge Java Bug",
        "Old versions of Forge crash with Java 8u321+.\n"
        "            To fix this, update forge to the latest version via the Versions tab\n"
        "            (right click on Forge, click Change Version, and choose the latest one)\n"
        "            Alternatively, you can download 8u312 or lower. "
        "See [archive](https://github.com/adoptium/temurin8-binaries/releases/tag/jdk8u312-b07)",
    ),
)

_intel_hd = _TextCheck(
    ("org.lwjgl.LWJGLException: Pixel format not accelerated",),
    Issue(
        "Intel HD Windows 10",
        "Your drivers don't support windows 10 officially\n"
        "        See https://prismlauncher.org/wiki/getting-started/installing-java/"
        "#a-note-about-intel-hd-20003000-on-windows-10 for more info",
    ),
)

_lwjgl_2_java_9 = _TextCheck(
    (
        "check_match: Assertion `version->filename == NULL || "
        "! _dl_name_match_p (version->filename, map)' failed!",
    ),
    Issue(
        "Linux: crash with pre-1.13 and Java 9+",
        "Using pre-1.13 (which uses LWJGL 2) with Java 9 or later usually causes a crash. "
        "Switching to Java 8 or below will fix your issue.\n"
        "        Alternatively, you can use [Temurin](https://adoptium.net/temurin/releases). "
        "However, multiplayer will not work in versions from 1.8 to 1.11.\n"
        "        For more information, type `/tag java`.",
    ),
)

_macos_ns = _TextCheck(
    ("Terminating app due to uncaught exception 'NSInternalInconsistencyException",),
    Issue(
        "MacOS NSInternalInconsistencyException",
        "You need to downgrade your Java 8 version. See "
        "https://prismlauncher.org/wiki/getting-started/installing-java/"
        "#older-minecraft-on-macos",
    ),
)

_oom = _TextCheck(
    ("java.lang.OutOfMemoryError",),
    Issue(
        "Out of Memory",
        "Allocating more RAM to your instance could help prevent this crash.",
    ),
)

_optinotfine = _TextCheck(
    ("[✔] OptiFine_", "[✔] optifabric-"),
    Issue(
        "Potential OptiFine Incompatibilities",
        "OptiFine is known to cause problems when paired with other mods. "
        "Try to disable OptiFine and see if the issue persists.\n"
        "        Check `/tag optifine` for more info & some typically more "
        "compatible alternatives you can use.",
    ),
)

_pre_1_12_native_transport_java_9 = _TextCheck(
    (
        "java.lang.RuntimeException: Unable to access address of buffer\n"
        "\tat io.netty.channel.epoll",
    ),
    Issue(
        "Linux: broken multiplayer with 1.8-1.11 and Java 9+",
        "These versions of Minecraft use an outdated version of Netty which does "
        "not properly support Java 9.\n"
        "\n"
        "Switching to Java 8 or below will fix this issue. For more information, "
        "type `/tag java`.\n"
        "\n"
        "If you must use a newer version, do the following:\n"
        "- Open `options.txt` (in the main window Edit -> Open .minecraft) and change.\n"
        "- Find `useNativeTransport:true` and change it to `useNativeTransport:false`.\n"
        "Note: whilst Netty was introduced in 1.7, this option did not exist "
        "which is why the issue was not present.",
    ),
)

_java_incompatible = _TextCheck(
    ("Java major version is incompatible. Things might break.",),
    Issue(
        "Java compatibility check skipped",
        "The Java major version may not work with your Minecraft instance. "
        "Please switch to a compatible version",
    ),
)

_forge_missing_dependencies = _TextCheck(
    ("Missing or unsupported mandatory dependencies",),
    Issue(
        "Missing mod dependencies",
        "You seem to be missing mod dependencies.\n"
        '\t\tSearch for "mandatory dependencies" in your log.',
    ),
)

_legacyjavafixer = _TextCheck(
    (
        "[SEVERE] [ForgeModLoader] Unable to launch\n"
        "java.util.ConcurrentModificationException",
    ),
    Issue(
        "LegacyJavaFixer",
        "You are using a modern Java version with an old Forge version, "
        "which is causing this crash.\n"
        "\t\tMinecraftForge provides a coremod to fix this issue, download it "
        "[here](https://dist.creeper.host/FTB2/maven/net/minecraftforge/lex/"
        "legacyjavafixer/1.0/legacyjavafixer-1.0.jar).",
    ),
)

_locked_jar = _TextCheck(
    ("Couldn't extract native jar",),
    Issue(
        "Locked Jars",
        "Something is locking your library jars.\n"
        "\t\tTo fix this, try rebooting your PC.",
    ),
)

_offline_launch = _TextCheck(
    ("(missing)\n",),
    Issue(
        "Missing Libraries",
        "You seem to be missing libraries. This is usually caused by launching "
        "offline before they can be downloaded.\n"
        "\t\tTo fix this, first ensure you are connected to the internet. Then, "
        "try selecting Edit > Version > Download All and launching your instance again.",
    ),
)

_frapi = _TextCheck(
    ('Cannot invoke "net.fabricmc.fabric.api.renderer.v1.Renderer.meshBuilder()"',),
    Issue(
        "Missing Indium",
        "You are using a mod that needs Indium.\n"
        "\t\tPlease install it by going to Edit > Mods > Download Mods.",
    ),
)

_no_disk_space = _TextCheck(
    ("There is not enough space on the disk",),
    Issue(
        "Out of disk space",
        "You ran out of disk space. You should free up some space on it.",
    ),
)

_java_32_bit = _TextCheck(
    (
        "Could not reserve enough space for ",
        "Invalid maximum heap size: ",
        "Invalid initial heap size: ",
    ),
    Issue(
        "32 bit Java crash",
        "You are using a 32 bit Java version. Please select 64 bit Java instead.\n"
        "\t\tCheck `/tag java` for more information.",
    ),
)

_intermediary_mappings = _TextCheck(
    ("Mapping source name conflicts detected:",),
    Issue(
        "Wrong Intermediary Mappings version",
        "You are using Intermediary Mappings for the wrong Minecraft version.\n"
        "\t\tPlease select Change Version while it is selected in Edit > Version.",
    ),
)

_old_forge_new_java = _TextCheck(
    (
        "add the flag -Dfml.ignoreInvalidMinecraftCertificates=true "
        "to the 'JVM settings'",
    ),
    Issue(
        "Forge on old Minecraft versions",
        "This crash is caused by using an old Forge version with a modern Java version.\n"
        "\t\tTo fix it, add the flag `-Dfml.ignoreInvalidMinecraftCertificates=true` "
        "to Edit > Settings > Java arguments.",
    ),
)

_checksum_mismatch = _TextCheck(
    ("Checksum mismatch, download is bad.",),
    Issue(
        "Outdated cached files",
        "It looks like you need to delete cached files.\n"
        "\t\tTo do that, press Folders ⟶ View Launcher Root Folder, and "
        '**after closing the launcher** delete the folder named "meta".',
    ),
)


def _java_option(text: str) -> Issue | None:
    match = _VM_OPTION.search(text)
    if match:
        option = match.group(1)
        if option == "UseShenandoahGC":
            title = "Java 8 and below don't support ShenandoahGC"
        else:
            title = "Wrong Java Arguments"
        return Issue(title, f"Remove `-XX:{option}` from your Java arguments")

    match = _UNRECOGNIZED_OPTION.search(text)
    if match:
        return Issue(
            "Wrong Java Arguments",
            f"Remove `{match.group(1)}` from your Java arguments",
        )
    return None


def _wrong_java(text: str) -> Issue | None:
    match = _SWITCH_VERSION.search(text)
    if match:
        versions = ", ".join(match.group(1).split("\n"))
        return Issue(
            "Wrong Java Version",
            f"Please switch to one of the following: `{versions}`\n"
            "For more information, type `/tag java`",
        )
    return _java_incompatible(text)


_CHECKS: tuple[Callable[[str], Issue | None], ...] = (
    _fabric_internal,
    _flatpak_nvidia,
    _forge_java,
    _intel_hd,
    _java_option,
    _lwjgl_2_java_9,
    _macos_ns,
    _oom,
    _optinotfine,
    _pre_1_12_native_transport_java_9,
    _wrong_java,
    _forge_missing_dependencies,
    _legacyjavafixer,
    _locked_jar,
    _offline_launch,
    _frapi,
    _no_disk_space,
    _java_32_bit,
    _intermediary_mappings,
    _old_forge_new_java,
    _checksum_mismatch,
)


def find_static_issues(log: str) -> list[Issue]:
    """Return every issue that can be recognised from the log text alone, in check order."""
    return [issue for check in _CHECKS if (issue := check(log)) is not None]


def _is_older(log_parts: list[int], latest_parts: list[int], latest: str) -> bool:
    if len(log_parts) != 2:
        return True
    if not latest_parts:
        raise ValueError(f"Couldn't parse latest launcher version {latest!r}")
    if log_parts[0] < latest_parts[0]:
        return True
    if log_parts[0] == latest_parts[0]:
        if len(latest_parts) < 2:
            raise ValueError(f"Couldn't parse latest launcher version {latest!r}")
        return log_parts[1] < latest_parts[1]
    return False


def outdated_launcher(log: str, latest_version: str) -> Issue | None:
    """Return an issue if the log names a launcher older than ``latest_version``."""
    match = _LAUNCHER_VERSION.search(log)
    if match is None:
        return None

    log_version = match.group(1)
    log_parts = semver_split(log_version)
    latest_parts = semver_split(latest_version)

    if not _is_older(log_parts, latest_parts, latest_version):
        return None

    if log_parts and log_parts[0] < 8:
        advice = "Please update; for more info see https://prismlauncher.org/download/"
    else:
        advice = (
            "Please update by pressing the `Update` button in the launcher "
            "or using your package manager."
        )
    return Issue(
        "Outdated Prism Launcher",
        f"Your installed version is {log_version}, while the newest version is "
        f"{latest_version}.\n{advice}",
    )


def find_issues(log: str, latest_version: str | None = None) -> list[Issue]:
    """Return all issues in the log; the launcher check runs when ``latest_version`` is known."""
    logger.debug("Checking log for issues")
    issues = find_static_issues(log)
    if latest_version is not None:
        outdated = outdated_launcher(log, latest_version)
        if outdated is not None:
            issues.append(outdated)
    return issues