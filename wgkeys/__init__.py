from __future__ import annotations

from wgkeys.errors import (
    InvalidPathError,
    KeyCommandError,
    KeyDerivationError,
    KeyFileDecodeError,
    KeyGenerationError,
    KeyPathPermissionError,
    KeyProvisioningError,
)
from wgkeys.models import KeyPair, KeyPaths
from wgkeys.provisioner import DEFAULT_KEY_DIR, DEFAULT_WG_BINARY, KeyProvisioner, genkey
from wgkeys.runner import CommandResult, CommandRunner, SubprocessCommandRunner

__all__ = [
    "DEFAULT_KEY_DIR",
    "DEFAULT_WG_BINARY",
    "CommandResult",
    "CommandRunner",
    "InvalidPathError",
    "KeyCommandError",
    "KeyDerivationError",
    "KeyFileDecodeError",
    "KeyGenerationError",
    "KeyPair",
    "KeyPathPermissionError",
    "KeyPaths",
    "KeyProvisioner",
    "KeyProvisioningError",
    "SubprocessCommandRunner",
    "genkey",
]
