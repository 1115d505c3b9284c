"""wgkeys CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path

import click

from wgkeys.config import WgKeysSettings, load_config
from wgkeys.errors import KeyProvisioningError
from wgkeys.logging import setup_logging
from wgkeys.models import KeyPair

_dir_option = click.option(
    "--dir",
    "key_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding the key files (overrides key_dir from config).",
)
_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML config file; environment and defaults are used when omitted.",
)


def _resolve_settings(config_path: Path | None) -> WgKeysSettings:
    try:
        if config_path is None:
            return WgKeysSettings()
        return load_config(config_path)
    except (OSError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _provision(name: str, key_dir: Path | None, config_path: Path | None) -> KeyPair:
    settings = _resolve_settings(config_path)
    setup_logging(settings.logging.level, json_output=settings.logging.json_output)
    provisioner = settings.build_provisioner()
    try:
        return provisioner.provision(name, key_dir)
    except (KeyProvisioningError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
def cli() -> None:
    """Provision WireGuard interface keys."""


@cli.command("genkey")
@click.argument("name")
@_dir_option
@_config_option
@click.option("--json", "as_json", is_flag=True, help="Print the keypair as a JSON object.")
def genkey_command(name: str, key_dir: Path | None, config_path: Path | None, as_json: bool) -> None:
    """Ensure the keypair for interface NAME exists and print it."""
    keypair = _provision(name, key_dir, config_path)
    if as_json:
        click.echo(
            json.dumps(
                {
                    "interface": keypair.interface_name,
                    "private_key": keypair.private_key.strip(),
                    "public_key": keypair.public_key.strip(),
                }
            )
        )
        return
    click.echo(keypair.private_key.strip())
    click.echo(keypair.public_key.strip())


@cli.command("pubkey")
@click.argument("name")
@_dir_option
@_config_option
def pubkey_command(name: str, key_dir: Path | None, config_path: Path | None) -> None:
    """Ensure the keypair for interface NAME exists and print its public key."""
    keypair = _provision(name, key_dir, config_path)
    click.echo(keypair.public_key.strip())


__all__ = ["cli"]
