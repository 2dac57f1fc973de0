"""
Audio output handling for ytmenu: sink enumeration and the audible cue.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .logging_config import get_logger, CommandError
from .runner import CommandRunner

logger = get_logger('audio')

DEFAULT_DEVICE = "default"
FALLBACK_DEVICE = "hw:0,0"

_CARD_LINE = re.compile(r"^card\s+(\d+):.*?,\s*device\s+(\d+):")


@dataclass(frozen=True)
class AudioDevice:
    """A playback sink: the engine's default or an ALSA hardware device."""
    label: str
    is_default: bool = False


def parse_aplay_listing(text: str) -> List[AudioDevice]:
    """Extract hw:<card>,<device> sinks from `aplay -l` output."""
    devices = []
    for line in text.splitlines():
        match = _CARD_LINE.match(line.strip())
        if match:
            card, device = match.groups()
            devices.append(AudioDevice(f"hw:{card},{device}"))
    return devices


class AudioDeviceRegistry:
    """Ordered list of output sinks, "default" first."""

    def __init__(self, devices: List[AudioDevice]):
        if not devices or not devices[0].is_default:
            raise ValueError("device list must start with the default entry")
        self.devices = devices

    @classmethod
    def detect(cls, runner: CommandRunner) -> "AudioDeviceRegistry":
        """Probe the host with `aplay -l`."""
        devices = [AudioDevice(DEFAULT_DEVICE, is_default=True)]
        hardware: List[AudioDevice] = []
        try:
            result = runner.run(["aplay", "-l"], capture=True)
            if result.ok:
                hardware = parse_aplay_listing(result.stdout)
        except CommandError as e:
            logger.warning(f"Audio device probe failed: {e}")

        if not hardware:
            logger.info(f"No hardware sinks found, adding {FALLBACK_DEVICE}")
            hardware = [AudioDevice(FALLBACK_DEVICE)]
        devices.extend(hardware)
        logger.info(f"Audio devices: {[d.label for d in devices]}")
        return cls(devices)

    def __len__(self) -> int:
        return len(self.devices)

    def current(self, index: int) -> str:
        """Device string for a (wrapped) index; index 0 is always "default"."""
        device = self.devices[index % len(self.devices)]
        return DEFAULT_DEVICE if device.is_default else device.label

    def next_index(self, index: int) -> int:
        return (index + 1) % len(self.devices)


class Notifier:
    """Plays the short pre-generated cue through aplay."""

    def __init__(self, runner: CommandRunner, sound_path: Path):
        self.runner = runner
        self.sound_path = sound_path

    def ensure_sound(self) -> bool:
        """Generate the cue with espeak if it does not exist yet.

        Returns:
            True if the sound file is available afterwards
        """
        if self.sound_path.exists():
            return True
        try:
            self.sound_path.parent.mkdir(parents=True, exist_ok=True)
            self.runner.run(["espeak", "-w", str(self.sound_path), "done"], capture=True)
        except (OSError, CommandError) as e:
            logger.warning(f"Could not generate notification sound: {e}")
            return False
        return self.sound_path.exists()

    def play(self, device: str = DEFAULT_DEVICE) -> None:
        """Fire-and-forget playback of the cue."""
        if not self.sound_path.exists():
            return
        args = ["aplay", "-q"]
        if device != DEFAULT_DEVICE:
            args.extend(["-D", device])
        args.append(str(self.sound_path))
        try:
            self.runner.run(args, background=True)
        except CommandError as e:
            logger.debug(f"Cue playback failed: {e}")
