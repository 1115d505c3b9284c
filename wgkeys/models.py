from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class KeyPaths(BaseModel):
    """Locations of the two key files for one interface."""

    model_config = ConfigDict(frozen=True)

    private_key_path: Path
    public_key_path: Path

    @classmethod
    def for_interface(cls, name: str, directory: str | Path) -> KeyPaths:
        base = Path(directory)
        return cls(
            private_key_path=base / f"{name}.key",
            public_key_path=base / f"{name}.pub",
        )

    def both(self) -> tuple[Path, Path]:
        return self.private_key_path, self.public_key_path


class KeyPair(BaseModel):
    """Key material read back from disk, private key first."""

    model_config = ConfigDict(frozen=True)

    interface_name: str
    directory: Path
    private_key: str
    public_key: str

    def as_tuple(self) -> tuple[str, str]:
        return self.private_key, self.public_key


__all__ = ["KeyPair", "KeyPaths"]
