from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class KeyProvisioningError(Exception):
    """Base class for errors raised while provisioning interface keys."""


class InvalidPathError(KeyProvisioningError, ValueError):
    """Raised when a key file path is occupied by a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is a directory")
        self.path = path


class KeyPathPermissionError(KeyProvisioningError, PermissionError):
    """Raised when the directory holding a key file is not writable."""

    def __init__(self, directory: Path) -> None:
        super().__init__(f"{directory} is not writable")
        self.directory = directory


class KeyFileDecodeError(KeyProvisioningError, ValueError):
    """Raised when a key file on disk is not UTF-8 text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path} is not valid UTF-8 key material: {reason}")
        self.path = path


class KeyCommandError(KeyProvisioningError):
    """A ``wg`` invocation exited with a non-zero status.

    ``output`` keeps the full diagnostic text; the message folds it onto one
    line so it reads cleanly in a CLI error.
    """

    action = "running wg"

    def __init__(self, command: Sequence[str], exit_code: int, output: str) -> None:
        super().__init__(f"Error while {self.action} (Exitcode: {exit_code}): {_one_line(output)}")
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output


class KeyGenerationError(KeyCommandError):
    action = "generating privkey"


class KeyDerivationError(KeyCommandError):
    action = "generating pubkey"


def _one_line(output: str) -> str:
    return "; ".join(line.strip() for line in output.splitlines() if line.strip())


__all__ = [
    "InvalidPathError",
    "KeyCommandError",
    "KeyDerivationError",
    "KeyFileDecodeError",
    "KeyGenerationError",
    "KeyPathPermissionError",
    "KeyProvisioningError",
]
