from __future__ import annotations

from pathlib import Path

from wgkeys.models import KeyPair, KeyPaths


def test_key_paths_use_interface_name_verbatim(tmp_path: Path) -> None:
    paths = KeyPaths.for_interface("wg-office.0", tmp_path)

    assert paths.both() == (tmp_path / "wg-office.0.key", tmp_path / "wg-office.0.pub")
    assert set(KeyPaths.model_fields) == {"private_key_path", "public_key_path"}


def test_key_pair_tuple_is_private_first(tmp_path: Path) -> None:
    pair = KeyPair(interface_name="wg0", directory=tmp_path, private_key="priv\n", public_key="pub\n")

    assert pair.as_tuple() == ("priv\n", "pub\n")
