"""Subprocess runner shared by the kubectl and gcloud wrappers."""

import logging
import shutil
import subprocess

from ..errors import CommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


class CommandRunner:
    """Run external commands and return their completed process."""

    def which(self, program: str) -> str | None:
        """Return the absolute path of a program on PATH, or None."""
        return shutil.which(program)

    def run(
        self,
        args: list[str],
        input: str | None = None,
        capture_output: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> subprocess.CompletedProcess:
        """
        Run a command without raising on a non-zero exit status.

        Args:
            args: Program and arguments
            input: Optional text fed to the process on stdin
            capture_output: If False, stdout/stderr go straight to the terminal
            timeout: Seconds before the process is killed

        Returns:
            CompletedProcess with text stdout/stderr (None when not captured)

        Raises:
            FileNotFoundError: If the program is not installed
            CommandError: If the command times out
        """
        logger.debug(f"Running: {' '.join(args)}")
        try:
            return subprocess.run(
                args,
                input=input,
                capture_output=capture_output,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
            raise CommandError(args, None, stderr) from e
