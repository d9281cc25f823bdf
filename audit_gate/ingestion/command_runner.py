"""
Subprocess execution for the audit gate.

Runs shell commands in the audited directory, times them, and makes sure
a package-lock.json exists while `npm audit` runs.
"""
import logging
import shlex
import subprocess
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from decisioning.errors import AuditGateError

logger = logging.getLogger(__name__)

PACKAGE_LOCK = "package-lock.json"
LOCKFILE_COMMAND = "npm install --package-lock-only"


class CommandFailedError(AuditGateError, RuntimeError):
    """Raised when a command that must succeed exits non-zero."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"`{command}` failed with exit code {exit_code}")


@dataclass
class CommandResult:
    command: str
    stdout: str
    exit_code: int
    duration: float

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """
    Runs commands in a working directory and reports how they went.

    Args:
        cwd: Directory the commands run in
        log: Callable receiving one human-readable line per command
        on_result: Optional callable receiving every CommandResult
    """

    def __init__(
        self,
        cwd: Path,
        log: Callable[[str], None],
        on_result: Optional[Callable[[CommandResult], None]] = None
    ):
        self.cwd = Path(cwd)
        self.log = log
        self.on_result = on_result

    def run(self, command: str, raise_on_failure: bool = False) -> CommandResult:
        """
        Run a command and capture its stdout.

        Args:
            command: Command line, split with shell quoting rules
            raise_on_failure: If True, a non-zero exit raises CommandFailedError

        Returns:
            CommandResult with stdout, exit code and rounded duration
        """
        logger.debug(f"Running `{command}` in {self.cwd}")
        started_at = time.monotonic()

        completed = subprocess.run(
            shlex.split(command),
            cwd=self.cwd,
            capture_output=True,
            text=True
        )

        duration = round(time.monotonic() - started_at, 2)
        result = CommandResult(
            command=command,
            stdout=completed.stdout,
            exit_code=completed.returncode,
            duration=duration
        )

        self.log(f"Ran `{command}`; finished in {duration}s with exit code {result.exit_code}")
        if completed.stderr:
            logger.debug(f"`{command}` stderr:\n{completed.stderr}")

        if self.on_result:
            self.on_result(result)

        if raise_on_failure and not result.succeeded:
            raise CommandFailedError(command, result.exit_code)

        return result


@contextmanager
def ensure_package_lock(runner: CommandRunner) -> Iterator[bool]:
    """
    Guarantee a package-lock.json in the runner's directory.

    A temporary lockfile is generated when none exists and removed on exit,
    whether or not the body raised.

    Yields:
        True if a temporary lockfile was created
    """
    lockfile = runner.cwd / PACKAGE_LOCK
    created = False

    try:
        if not lockfile.exists():
            runner.log(f"Creating a temporary {PACKAGE_LOCK}...")
            runner.run(LOCKFILE_COMMAND, raise_on_failure=True)
            created = True

        yield created
    finally:
        if created:
            lockfile.unlink(missing_ok=True)
            runner.log(f"Removed temporary {PACKAGE_LOCK}")
