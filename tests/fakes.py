from __future__ import annotations

import base64
import binascii
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey

from wgkeys.runner import CommandResult

_BAD_KEY_MESSAGE = b"pubkey: Key is not the correct length or format\n"


@dataclass(slots=True)
class RecordedCall:
    command: list[str]
    input: bytes | None
    merge_stderr: bool


def derive_public_key(private_key_b64: bytes) -> bytes:
    raw = base64.b64decode(private_key_b64.strip(), validate=True)
    if len(raw) != 32:
        raise ValueError("private key must be 32 bytes")
    public_raw = X25519PrivateKey.from_private_bytes(raw).public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return base64.b64encode(public_raw) + b"\n"


@dataclass
class FakeWireGuard:
    """In-process stand-in for ``wg genkey`` / ``wg pubkey`` backed by real X25519 keys."""

    genkey_exit_code: int = 0
    pubkey_exit_code: int = 0
    on_run: Callable[[list[str]], None] | None = None
    calls: list[RecordedCall] = field(default_factory=list)

    def run(
        self,
        command: Sequence[str],
        *,
        input: bytes | None = None,
        merge_stderr: bool = False,
    ) -> CommandResult:
        parts = [str(part) for part in command]
        self.calls.append(RecordedCall(command=parts, input=input, merge_stderr=merge_stderr))
        if self.on_run is not None:
            self.on_run(parts)

        subcommand = parts[1] if len(parts) > 1 else ""
        if subcommand == "genkey":
            return self._genkey()
        if subcommand == "pubkey":
            return self._pubkey(input or b"")
        return CommandResult(exit_code=1, output=f"Invalid subcommand: `{subcommand}'\n".encode())

    def subcommands(self) -> list[str]:
        return [call.command[1] for call in self.calls]

    def _genkey(self) -> CommandResult:
        if self.genkey_exit_code != 0:
            return CommandResult(
                exit_code=self.genkey_exit_code,
                output=b"",
                stderr=b"Unable to open /dev/urandom\n",
            )
        private_raw = X25519PrivateKey.generate().private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return CommandResult(exit_code=0, output=base64.b64encode(private_raw) + b"\n")

    def _pubkey(self, private_key: bytes) -> CommandResult:
        if self.pubkey_exit_code != 0:
            return CommandResult(exit_code=self.pubkey_exit_code, output=b"pubkey: failed\n")
        try:
            return CommandResult(exit_code=0, output=derive_public_key(private_key))
        except (binascii.Error, ValueError):
            return CommandResult(exit_code=1, output=_BAD_KEY_MESSAGE)


__all__ = ["FakeWireGuard", "RecordedCall", "derive_public_key"]
