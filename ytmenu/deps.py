"""
Startup check for the external tools ytmenu drives.
"""
import platform
from pathlib import Path
from typing import Dict, List, Optional

from .logging_config import get_logger, DependencyError
from .runner import CommandRunner

logger = get_logger('deps')

REQUIRED_TOOLS = ("yt-dlp", "mpv", "aplay")
TTS_TOOL = "espeak"

OS_RELEASE = Path("/etc/os-release")

INSTALL_COMMANDS: Dict[str, str] = {
    "debian": "sudo apt install",
    "fedora": "sudo dnf install",
    "arch": "sudo pacman -S",
    "suse": "sudo zypper install",
    "alpine": "sudo apk add",
    "macos": "brew install",
}

# Package names that differ from the command name
PACKAGES: Dict[str, Dict[str, str]] = {
    "aplay": {"default": "alsa-utils"},
    "espeak": {"default": "espeak", "arch": "espeak-ng", "fedora": "espeak-ng", "alpine": "espeak-ng"},
}

# os-release ID / ID_LIKE values -> family
FAMILIES: Dict[str, str] = {
    "debian": "debian",
    "ubuntu": "debian",
    "linuxmint": "debian",
    "pop": "debian",
    "raspbian": "debian",
    "fedora": "fedora",
    "rhel": "fedora",
    "centos": "fedora",
    "arch": "arch",
    "manjaro": "arch",
    "endeavouros": "arch",
    "opensuse": "suse",
    "suse": "suse",
    "sles": "suse",
    "alpine": "alpine",
}


def parse_os_release(text: str) -> Dict[str, str]:
    values = {}
    for line in text.splitlines():
        if "=" not in line or line.lstrip().startswith("#"):
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def detect_distribution(os_release: Path = OS_RELEASE) -> Optional[str]:
    """Package family of the host, None when unknown."""
    if platform.system() == "Darwin":
        return "macos"
    try:
        info = parse_os_release(os_release.read_text())
    except OSError:
        return None
    candidates = [info.get("ID", "")] + info.get("ID_LIKE", "").split()
    for candidate in candidates:
        for prefix, family in FAMILIES.items():
            if candidate.lower().startswith(prefix):
                return family
    return None


def missing_tools(runner: CommandRunner, need_tts: bool = False) -> List[str]:
    tools = list(REQUIRED_TOOLS)
    if need_tts:
        tools.append(TTS_TOOL)
    return [tool for tool in tools if not runner.which(tool)]


def package_name(tool: str, family: str) -> str:
    names = PACKAGES.get(tool, {})
    return names.get(family, names.get("default", tool))


def install_hint(missing: List[str], family: Optional[str]) -> str:
    if family is None or family not in INSTALL_COMMANDS:
        return ("Unsupported distribution: install "
                f"{', '.join(missing)} with your package manager.")
    packages = " ".join(package_name(tool, family) for tool in missing)
    return f"Install them with: {INSTALL_COMMANDS[family]} {packages}"


def check_dependencies(runner: CommandRunner, need_tts: bool = False,
                       os_release: Path = OS_RELEASE) -> None:
    """Raise DependencyError when a required tool is not on PATH."""
    missing = missing_tools(runner, need_tts)
    if not missing:
        logger.debug("All external tools found")
        return
    family = detect_distribution(os_release)
    logger.info(f"Missing tools {missing} on {family or 'unknown distribution'}")
    raise DependencyError(
        f"Missing dependencies: {', '.join(missing)}\n{install_hint(missing, family)}"
    )
