"""
Playback and download command lines for mpv and yt-dlp.
"""
from pathlib import Path
from typing import List, Optional

from .audio import DEFAULT_DEVICE
from .config import VIDEO_MAX_HEIGHT
from .logging_config import get_logger

logger = get_logger('media')

AUDIO_EXTENSION = "mp3"
VIDEO_EXTENSION = "mp4"
OUTPUT_TEMPLATE = "%(title)s.%(ext)s"


def playable(target: str) -> str:
    """mpv only resolves bare video ids through its ytdl:// scheme."""
    if "://" in target or Path(target).exists():
        return target
    return f"ytdl://{target}"


def player_command(targets: List[str], device: str = DEFAULT_DEVICE,
                   audio_only: bool = False, shuffle: bool = False) -> List[str]:
    cmd = ["mpv"]
    if shuffle:
        cmd.append("--shuffle")
    if device != DEFAULT_DEVICE:
        cmd.append(f"--audio-device=alsa/{device}")
    if audio_only:
        cmd.append("--no-video")
    cmd.extend(targets)
    return cmd


def download_command(url: str, audio_only: bool) -> List[str]:
    if audio_only:
        fmt_args = ["-x", "--audio-format", AUDIO_EXTENSION]
    else:
        q = VIDEO_MAX_HEIGHT
        fmt_args = ["-f", f"bestvideo[height<={q}]+bestaudio/best[height<={q}]",
                    "--merge-output-format", VIDEO_EXTENSION]
    return ["yt-dlp", *fmt_args, "-o", OUTPUT_TEMPLATE, url]


def local_media(directory: Path, audio_only: bool) -> List[str]:
    """Previously downloaded files of the type matching ``audio_only``."""
    ext = AUDIO_EXTENSION if audio_only else VIDEO_EXTENSION
    return sorted(str(p) for p in directory.glob(f"*.{ext}") if p.is_file())


def shuffle_command(directory: Path, device: str, audio_only: bool) -> Optional[List[str]]:
    files = local_media(directory, audio_only)
    if not files:
        logger.info(f"No local .{AUDIO_EXTENSION if audio_only else VIDEO_EXTENSION} files in {directory}")
        return None
    return player_command(files, device=device, audio_only=audio_only, shuffle=True)
