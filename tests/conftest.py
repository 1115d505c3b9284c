from __future__ import annotations

import os
from pathlib import Path

import pytest

from wgkeys.provisioner import KeyProvisioner

from tests.fakes import FakeWireGuard


@pytest.fixture(autouse=True)
def _clear_wgkeys_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("WGKEYS_"):
            monkeypatch.delenv(key)


@pytest.fixture
def fake_wg() -> FakeWireGuard:
    return FakeWireGuard()


@pytest.fixture
def key_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "wireguard"
    directory.mkdir()
    return directory


@pytest.fixture
def provisioner(fake_wg: FakeWireGuard, key_dir: Path) -> KeyProvisioner:
    return KeyProvisioner(runner=fake_wg, wg_binary="/usr/bin/wg", default_directory=key_dir)
