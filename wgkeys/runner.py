from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

_SHELLS = frozenset({"bash", "sh", "zsh", "dash"})


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one command. ``stderr`` is empty when it was merged into ``output``."""

    exit_code: int
    output: bytes
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")

    def diagnostics(self) -> str:
        """Human-readable failure text: stderr when captured separately, else the output."""
        raw = self.stderr or self.output
        return raw.decode("utf-8", errors="replace")


@runtime_checkable
class CommandRunner(Protocol):
    """Executes ``wg`` on behalf of the provisioner.

    Kept as a protocol so tests and alternative backends can stand in for the
    real binary without touching the filesystem logic.
    """

    def run(
        self,
        command: Sequence[str],
        *,
        input: bytes | None = None,
        merge_stderr: bool = False,
    ) -> CommandResult: ...


class SubprocessCommandRunner:
    """Runs argument-list commands with ``subprocess.run`` and blocks until they exit."""

    def run(
        self,
        command: Sequence[str],
        *,
        input: bytes | None = None,
        merge_stderr: bool = False,
    ) -> CommandResult:
        parts = self._normalize_command(command)
        logger.debug("Running %s", " ".join(parts))
        completed = subprocess.run(
            parts,
            input=input,
            stdin=subprocess.DEVNULL if input is None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
            check=False,
        )
        return CommandResult(
            exit_code=completed.returncode,
            output=completed.stdout,
            stderr=b"" if merge_stderr else completed.stderr,
        )

    def _normalize_command(self, command: Sequence[str]) -> list[str]:
        if isinstance(command, str):
            raise ValueError("command must be an argument list, not a shell string")

        parts = [str(part) for part in command]
        if not parts:
            raise ValueError("command must not be empty")
        if not parts[0]:
            raise ValueError("command executable must not be empty")
        if Path(parts[0]).name in _SHELLS and len(parts) > 1 and parts[1] == "-c":
            raise ValueError("shell '-c' execution is not allowed; provide argument-list commands")
        return parts


__all__ = ["CommandResult", "CommandRunner", "SubprocessCommandRunner"]
