"""Idempotent WireGuard keypair provisioning.

Presence of ``<name>.key`` and ``<name>.pub`` on disk is the whole state:
missing files are generated with ``wg genkey`` / ``wg pubkey`` and existing
ones are returned untouched. No locking is done, so two processes racing on
the same interface can both generate a private key.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from wgkeys.errors import (
    InvalidPathError,
    KeyDerivationError,
    KeyFileDecodeError,
    KeyGenerationError,
    KeyPathPermissionError,
)
from wgkeys.logging import provisioning_scope
from wgkeys.models import KeyPair, KeyPaths
from wgkeys.runner import CommandRunner, SubprocessCommandRunner

logger = logging.getLogger(__name__)

DEFAULT_KEY_DIR = Path("/etc/wireguard")
DEFAULT_WG_BINARY = "/usr/bin/wg"

_PRIVATE_KEY_MODE = 0o600


class KeyProvisioner:
    """Ensures the private and public key files for an interface exist.

    Usage::

        provisioner = KeyProvisioner()
        keypair = provisioner.provision("wg0")
        private_key, public_key = keypair.as_tuple()
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        wg_binary: str = DEFAULT_WG_BINARY,
        default_directory: str | Path = DEFAULT_KEY_DIR,
    ) -> None:
        self._runner = runner if runner is not None else SubprocessCommandRunner()
        self._wg_binary = wg_binary
        self._default_directory = Path(default_directory)

    def provision(self, name: str, directory: str | Path | None = None) -> KeyPair:
        """Return the keypair for ``name``, creating whichever key files are missing."""
        target_dir = self._default_directory if directory is None else Path(directory)
        paths = KeyPaths.for_interface(name, target_dir)

        with provisioning_scope(interface=name, directory=str(target_dir)):
            self._validate(paths)
            self._ensure_private_key(paths)
            self._ensure_public_key(paths)

            return KeyPair(
                interface_name=name,
                directory=target_dir,
                private_key=_read_key(paths.private_key_path),
                public_key=_read_key(paths.public_key_path),
            )

    def _validate(self, paths: KeyPaths) -> None:
        """Raise before anything is written if either key path is unusable."""
        for path in paths.both():
            if path.is_dir():
                raise InvalidPathError(path)
            parent = path.parent
            if not os.access(parent, os.W_OK):
                raise KeyPathPermissionError(parent)

    def _ensure_private_key(self, paths: KeyPaths) -> None:
        """Generate ``<name>.key`` when absent and drop any public key it would orphan."""
        if paths.private_key_path.exists():
            return

        command = [self._wg_binary, "genkey"]
        result = self._runner.run(command)
        if not result.ok:
            raise KeyGenerationError(command, result.exit_code, result.diagnostics())

        _write_private(paths.private_key_path, result.output)
        logger.info("Generated private key %s", paths.private_key_path)

        # A public key left over from the previous private key no longer matches.
        if paths.public_key_path.exists():
            paths.public_key_path.unlink()
            logger.info("Removed stale public key %s", paths.public_key_path)

    def _ensure_public_key(self, paths: KeyPaths) -> None:
        """Derive ``<name>.pub`` from the private key on disk.

        stderr is merged so a failing ``wg pubkey`` reports its diagnostic in
        the error, and a failed run leaves no public key behind for a retry.
        """
        if paths.public_key_path.exists():
            return

        command = [self._wg_binary, "pubkey"]
        result = self._runner.run(
            command,
            input=paths.private_key_path.read_bytes(),
            merge_stderr=True,
        )
        if not result.ok:
            raise KeyDerivationError(command, result.exit_code, result.diagnostics())

        paths.public_key_path.write_bytes(result.output)
        logger.info("Derived public key %s", paths.public_key_path)


def _write_private(path: Path, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _PRIVATE_KEY_MODE)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def _read_key(path: Path) -> str:
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise KeyFileDecodeError(path, exc.reason) from exc


def genkey(
    name: str,
    path: str | Path = DEFAULT_KEY_DIR,
    *,
    runner: CommandRunner | None = None,
    wg_binary: str = DEFAULT_WG_BINARY,
) -> tuple[str, str]:
    """Return ``(private_key, public_key)`` for interface ``name``, generating them if absent.

    Example::

        genkey("wg0", "/etc/wireguard")
        # ('2N0YBID3tnptapO/V5x3GG78KloA8xkLz1QtX6OVRW8=\\n',
        #  'Pz4sRKhRMSet7IYVXXeZrAguBSs+q8oAVMfAAXHJ7S8=\\n')
    """
    provisioner = KeyProvisioner(runner=runner, wg_binary=wg_binary, default_directory=path)
    return provisioner.provision(name).as_tuple()


__all__ = ["DEFAULT_KEY_DIR", "DEFAULT_WG_BINARY", "KeyProvisioner", "genkey"]
