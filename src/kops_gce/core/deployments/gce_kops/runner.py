"""Subprocess helpers for the external provisioning tools.

Security Note: commands are built from argument lists and never passed
through a shell. Bandit B603 warnings are suppressed with nosec comments.
"""

import logging
import os
import shutil
import subprocess  # nosec B404
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished subprocess."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout, self.stderr) if part).strip()

    @property
    def summary(self) -> str:
        """Last line of the combined output."""
        lines = self.output.splitlines()
        return lines[-1].strip() if lines else ""


class CommandError(RuntimeError):
    """A command exited with a non-zero status."""

    def __init__(self, result: CommandResult) -> None:
        message = f"'{' '.join(result.args)}' exited with status {result.returncode}"
        if result.summary:
            message = f"{message}: {result.summary}"
        super().__init__(message)
        self.result = result


class CommandTimeoutError(RuntimeError):
    """A command did not finish within its time budget."""

    def __init__(self, args: Sequence[str], timeout: float) -> None:
        super().__init__(f"'{' '.join(args)}' timed out after {timeout:g}s")
        self.timeout = timeout


class ExecutableNotFoundError(RuntimeError):
    """A command could not be found on PATH."""


class CommandRunner:
    """Run external tools with a bounded wait."""

    def __init__(self, default_timeout: float = 3600) -> None:
        self.default_timeout = default_timeout

    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        capture: bool = False,
        check: bool = True,
        input_text: str | None = None,
    ) -> CommandResult:
        """Run a command and wait for it to exit.

        Args:
            args: Executable followed by its arguments.
            timeout: Seconds to wait before the process is killed.
            capture: Capture output instead of streaming it to the terminal.
            check: Raise ``CommandError`` on a non-zero exit status.
            input_text: Text written to the process standard input.

        Returns:
            The finished command result.
        """
        executable = args[0] if os.path.sep in args[0] else shutil.which(args[0])
        if not executable:
            raise ExecutableNotFoundError(f"Executable not found: {args[0]}")
        budget = self.default_timeout if timeout is None else timeout
        resolved = [executable, *args[1:]]
        logger.debug("Running: %s", " ".join(resolved))
        try:
            completed = subprocess.run(  # nosec B603
                resolved,
                check=False,
                capture_output=capture,
                text=True,
                errors="replace",
                input=input_text,
                timeout=budget,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(args, budget) from exc

        result = CommandResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if capture and result.returncode != 0 and result.output:
            logger.debug(
                "%s exited with status %d:\n%s", args[0], result.returncode, result.output
            )
        if check and result.returncode != 0:
            raise CommandError(result)
        return result


@contextmanager
def scoped_environment(overrides: Mapping[str, str]) -> Iterator[None]:
    """Apply environment variables and restore the previous values on exit.

    Args:
        overrides: Variables to set for the duration of the block.
    """
    previous = {key: os.environ.get(key) for key in overrides}
    os.environ.update(overrides)
    try:
        yield
    finally:
        for key, value in previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
