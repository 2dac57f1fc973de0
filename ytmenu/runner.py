"""
External process invocation for ytmenu.

Every tool ytmenu drives (yt-dlp, mpv, aplay, espeak) is started through
a CommandRunner so the menu can be exercised without spawning processes.
"""
import shutil
import subprocess
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .logging_config import get_logger, CommandError

logger = get_logger('runner')


@dataclass
class CommandResult:
    """Outcome of an external command."""
    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs external commands synchronously."""

    def __init__(self):
        self._command_cache: Dict[str, Optional[str]] = {}

    def which(self, cmd: str) -> Optional[str]:
        """Find an external command in PATH with caching."""
        if cmd not in self._command_cache:
            self._command_cache[cmd] = shutil.which(cmd)
        return self._command_cache[cmd]

    def run(self, args: Sequence[str], capture: bool = False,
            background: bool = False) -> CommandResult:
        """Run a command.

        Args:
            args: Program and arguments
            capture: Collect stdout as text instead of inheriting the terminal
            background: Start detached with output discarded and return at once

        Returns:
            CommandResult with the exit status (0 for background starts)

        Raises:
            CommandError: if the program cannot be started
        """
        args = list(args)
        logger.debug(f"Running: {args}")
        try:
            if background:
                subprocess.Popen(
                    args,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    start_new_session=True,
                )
                return CommandResult(0)

            if capture:
                proc = subprocess.run(
                    args,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True,
                    errors="replace",
                    check=False,
                )
                if proc.returncode != 0:
                    logger.warning(f"{args[0]} exited with {proc.returncode}: {proc.stderr.strip()[:500]}")
                return CommandResult(proc.returncode, proc.stdout)

            proc = subprocess.run(args, check=False)
        except (FileNotFoundError, PermissionError, OSError) as e:
            logger.error(f"Failed to start {args[0]}: {e}")
            raise CommandError(f"Failed to start {args[0]}: {e}") from e

        if proc.returncode != 0:
            logger.info(f"{args[0]} exited with {proc.returncode}")
        return CommandResult(proc.returncode)
